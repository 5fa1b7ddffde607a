"""Sales CSV source - reads the dataset from a local file or downloads it over HTTP"""

import asyncio
import io
from pathlib import Path
from typing import Dict, List, Mapping

import httpx
import pandas as pd

from sales_gateway.config import settings
from sales_gateway.domain.exceptions import DataSourceError
from sales_gateway.domain.models import SalesRecord
from sales_gateway.utils.date_utils import parse_datetime
from sales_gateway.utils.number_utils import parse_decimal, parse_non_negative_int

# CSV header -> SalesRecord attribute
COLUMN_MAP: Dict[str, str] = {
    "Transaction ID": "transaction_id",
    "Date": "date",
    "Customer ID": "customer_id",
    "Customer Name": "customer_name",
    "Phone Number": "phone_number",
    "Gender": "gender",
    "Age": "age",
    "Customer Region": "customer_region",
    "Customer Type": "customer_type",
    "Product ID": "product_id",
    "Product Name": "product_name",
    "Brand": "brand",
    "Product Category": "product_category",
    "Tags": "tags",
    "Quantity": "quantity",
    "Price per Unit": "price_per_unit",
    "Discount Percentage": "discount_percentage",
    "Total Amount": "total_amount",
    "Final Amount": "final_amount",
    "Payment Method": "payment_method",
    "Order Status": "order_status",
    "Delivery Type": "delivery_type",
    "Store ID": "store_id",
    "Store Location": "store_location",
    "Salesperson ID": "salesperson_id",
    "Employee Name": "employee_name",
}

# Columns the query pipeline filters or sorts on
REQUIRED_COLUMNS = (
    "Transaction ID",
    "Date",
    "Customer Name",
    "Phone Number",
    "Gender",
    "Age",
    "Customer Region",
    "Product Category",
    "Tags",
    "Quantity",
    "Payment Method",
)

INT_FIELDS = {"age", "quantity"}
DECIMAL_FIELDS = {"price_per_unit", "discount_percentage", "total_amount", "final_amount"}


def row_to_record(row: Mapping[str, str]) -> SalesRecord:
    """
    Normalize one CSV row into a SalesRecord.

    Numeric and date cells that cannot be parsed become None rather than
    failing the whole load.
    """
    values = {}
    for column, attribute in COLUMN_MAP.items():
        cell = str(row.get(column) or "").strip()
        if attribute == "date":
            values[attribute] = parse_datetime(cell)
        elif attribute in INT_FIELDS:
            values[attribute] = parse_non_negative_int(cell)
        elif attribute in DECIMAL_FIELDS:
            values[attribute] = parse_decimal(cell)
        else:
            values[attribute] = cell
    return SalesRecord(**values)


def parse_sales_csv(content: bytes) -> List[SalesRecord]:
    """
    Parse raw CSV bytes into records.

    Raises:
        DataSourceError: On unreadable CSV or missing required columns
    """
    try:
        frame = pd.read_csv(io.BytesIO(content), dtype=str, keep_default_na=False)
    except (pd.errors.ParserError, pd.errors.EmptyDataError, UnicodeDecodeError) as e:
        raise DataSourceError(f"Unreadable sales CSV: {e}") from e

    frame.columns = [str(column).strip() for column in frame.columns]
    missing = [column for column in REQUIRED_COLUMNS if column not in frame.columns]
    if missing:
        raise DataSourceError(f"Sales CSV is missing columns: {', '.join(missing)}")

    return [row_to_record(row) for row in frame.to_dict(orient="records")]


class SalesDataSource:
    """Fetches the sales dataset from a remote URL or a local CSV file"""

    def __init__(
        self,
        file_path: str | None = None,
        url: str | None = None,
        timeout: float | None = None,
    ):
        self.file_path = file_path or settings.data_file_path
        self.url = url if url is not None else settings.data_source_url
        self.timeout = timeout or settings.http_timeout_seconds

    @property
    def description(self) -> str:
        return self.url or str(self.file_path)

    async def fetch_records(self) -> List[SalesRecord]:
        """
        Load and parse the full dataset.

        Raises:
            DataSourceError: On timeout, HTTP errors, missing file or invalid CSV
        """
        if self.url:
            content = await self._download()
        else:
            content = await asyncio.to_thread(self._read_file)
        return await asyncio.to_thread(parse_sales_csv, content)

    async def _download(self) -> bytes:
        async with httpx.AsyncClient(timeout=self.timeout, follow_redirects=True) as client:
            try:
                response = await client.get(self.url)
                response.raise_for_status()
                return response.content

            except httpx.TimeoutException as e:
                raise DataSourceError(f"Sales data download timed out after {self.timeout}s") from e
            except httpx.HTTPStatusError as e:
                raise DataSourceError(f"Sales data download failed: {e.response.status_code}") from e
            except httpx.RequestError as e:
                raise DataSourceError(f"Sales data source unreachable: {e}") from e

    def _read_file(self) -> bytes:
        try:
            return Path(self.file_path).read_bytes()
        except OSError as e:
            raise DataSourceError(f"Cannot read sales file {self.file_path}: {e}") from e
