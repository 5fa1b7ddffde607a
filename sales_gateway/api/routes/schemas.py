"""Pydantic schemas for API responses"""

from dataclasses import asdict
from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from sales_gateway.domain.models import ResultPage, SalesRecord


class SalesRecordSchema(BaseModel):
    """Single sales record, keyed by the dataset's column names"""

    model_config = ConfigDict(populate_by_name=True)

    transaction_id: str = Field(alias="Transaction ID")
    date: Optional[datetime] = Field(default=None, alias="Date")
    customer_id: str = Field(default="", alias="Customer ID")
    customer_name: str = Field(default="", alias="Customer Name")
    phone_number: str = Field(default="", alias="Phone Number")
    gender: str = Field(default="", alias="Gender")
    age: Optional[int] = Field(default=None, alias="Age")
    customer_region: str = Field(default="", alias="Customer Region")
    customer_type: str = Field(default="", alias="Customer Type")
    product_id: str = Field(default="", alias="Product ID")
    product_name: str = Field(default="", alias="Product Name")
    brand: str = Field(default="", alias="Brand")
    product_category: str = Field(default="", alias="Product Category")
    tags: str = Field(default="", alias="Tags")
    quantity: Optional[int] = Field(default=None, alias="Quantity")
    price_per_unit: Optional[float] = Field(default=None, alias="Price per Unit")
    discount_percentage: Optional[float] = Field(default=None, alias="Discount Percentage")
    total_amount: Optional[float] = Field(default=None, alias="Total Amount")
    final_amount: Optional[float] = Field(default=None, alias="Final Amount")
    payment_method: str = Field(default="", alias="Payment Method")
    order_status: str = Field(default="", alias="Order Status")
    delivery_type: str = Field(default="", alias="Delivery Type")
    store_id: str = Field(default="", alias="Store ID")
    store_location: str = Field(default="", alias="Store Location")
    salesperson_id: str = Field(default="", alias="Salesperson ID")
    employee_name: str = Field(default="", alias="Employee Name")

    @classmethod
    def from_record(cls, record: SalesRecord) -> "SalesRecordSchema":
        return cls(**asdict(record))


class FilterOptionsSchema(BaseModel):
    """Selectable values for the UI filter controls"""

    model_config = ConfigDict(populate_by_name=True)

    region: List[str] = []
    gender: List[str] = []
    category: List[str] = []
    payment_method: List[str] = Field(default=[], alias="paymentMethod")
    tags: List[str] = []


class SalesPageResponse(BaseModel):
    """Response for GET /api/sales"""

    model_config = ConfigDict(populate_by_name=True)

    items: List[SalesRecordSchema]
    total_items: int = Field(alias="totalItems")
    total_pages: int = Field(alias="totalPages")
    page: int
    page_size: int = Field(alias="pageSize")
    filters: FilterOptionsSchema

    @classmethod
    def from_result(cls, result: ResultPage) -> "SalesPageResponse":
        return cls(
            items=[SalesRecordSchema.from_record(record) for record in result.items],
            total_items=result.total_items,
            total_pages=result.total_pages,
            page=result.page,
            page_size=result.page_size,
            filters=FilterOptionsSchema.model_validate(result.filters),
        )


class ErrorResponse(BaseModel):
    """Body returned for failed requests"""

    error: str
