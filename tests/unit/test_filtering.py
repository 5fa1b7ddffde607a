"""Unit tests for record filtering"""

from datetime import datetime

from sales_gateway.domain.filtering import apply_filters, matches
from sales_gateway.domain.models import FilterSpec


def test_empty_spec_matches_everything(sample_records):
    """Test that no active predicate keeps every record"""
    assert apply_filters(sample_records, FilterSpec()) == sample_records


def test_search_matches_name_or_phone_case_insensitively(make_record):
    """Test search over customer name and phone number"""
    record = make_record(customer_name="Priya Nair", phone_number="9123456780")

    assert matches(record, FilterSpec(search="priya"))
    assert matches(record, FilterSpec(search="nair"))
    assert matches(record, FilterSpec(search="345"))
    assert not matches(record, FilterSpec(search="rohan"))


def test_multi_select_requires_membership(make_record):
    """Test region/gender/category/payment method selection sets"""
    record = make_record(
        customer_region="North", gender="Female", product_category="Beauty", payment_method="Cash"
    )

    assert matches(record, FilterSpec(regions=frozenset({"North", "South"})))
    assert not matches(record, FilterSpec(regions=frozenset({"East"})))
    assert matches(record, FilterSpec(genders=frozenset({"Female"})))
    assert not matches(record, FilterSpec(categories=frozenset({"Clothing"})))
    assert not matches(record, FilterSpec(payment_methods=frozenset({"UPI"})))


def test_multi_select_rejects_empty_record_value(make_record):
    """Test a record without a region never matches an active region filter"""
    record = make_record(customer_region="")
    assert not matches(record, FilterSpec(regions=frozenset({"North"})))


def test_tags_match_any_requested_tag(make_record):
    """Test tag filter needs at least one overlapping tag"""
    on_sale = make_record(tags="gadgets|sale")
    on_clearance = make_record(tags=" decor | clearance ")
    untagged = make_record(tags="")
    other = make_record(tags="kitchen")

    spec = FilterSpec(tags=frozenset({"sale", "clearance"}))

    assert matches(on_sale, spec)
    assert matches(on_clearance, spec)
    assert not matches(untagged, spec)
    assert not matches(other, spec)


def test_age_range_is_inclusive(make_record):
    """Test both age bounds are inclusive"""
    spec = FilterSpec(age_min=30, age_max=40)

    assert matches(make_record(age=30), spec)
    assert matches(make_record(age=40), spec)
    assert not matches(make_record(age=29), spec)
    assert not matches(make_record(age=41), spec)


def test_age_range_excludes_missing_age(make_record):
    """Test records without an age fail whenever an age bound is set"""
    record = make_record(age=None)

    assert matches(record, FilterSpec())
    assert not matches(record, FilterSpec(age_min=18))
    assert not matches(record, FilterSpec(age_max=99))


def test_date_range_is_inclusive_and_excludes_missing_dates(make_record):
    """Test date bounds and records with unparseable dates"""
    spec = FilterSpec(date_from=datetime(2023, 2, 1), date_to=datetime(2023, 2, 28, 23, 59, 59))

    assert matches(make_record(date=datetime(2023, 2, 1)), spec)
    assert matches(make_record(date=datetime(2023, 2, 28, 12)), spec)
    assert not matches(make_record(date=datetime(2023, 1, 31)), spec)
    assert not matches(make_record(date=datetime(2023, 3, 1)), spec)
    assert not matches(make_record(date=None), spec)
    assert matches(make_record(date=None), FilterSpec())


def test_predicates_are_and_combined(sample_records):
    """Test multiple filters narrow the result together"""
    spec = FilterSpec(genders=frozenset({"Female"}), regions=frozenset({"North"}))
    names = [r.customer_name for r in apply_filters(sample_records, spec)]
    assert names == ["Ishita Verma"]


def test_widening_a_selection_never_reduces_matches(sample_records):
    """Test filter monotonicity for multi-select sets"""
    narrow = FilterSpec(regions=frozenset({"North"}))
    wide = FilterSpec(regions=frozenset({"North", "West"}))

    narrow_matches = apply_filters(sample_records, narrow)
    wide_matches = apply_filters(sample_records, wide)

    assert len(narrow_matches) <= len(wide_matches)
    assert all(record in wide_matches for record in narrow_matches)
