import pytest

from calculator import CalculatorInputs, compute
from calculator.breakdown import breakdown_frame, breakdown_rows
from calculator.currency import AUD


@pytest.fixture
def results():
    return compute(CalculatorInputs.defaults())


def test_row_order_with_gst_and_contractors(results):
    labels = [r["label"] for r in breakdown_rows(results, "annual")]
    assert labels == [
        "Gross revenue", "GST", "Contractor pay", "Real revenue", "Profit",
        "Owner's pay", "Taxable income", "Tax", "Operating expenses",
    ]


def test_optional_rows_hidden():
    res = compute(CalculatorInputs(desired_take_home=20_000, profit_percent=5,
                                   owners_pay_percent=45, contractor_pay=0))
    labels = [r["label"] for r in breakdown_rows(res, "annual")]
    assert "GST" not in labels
    assert "Contractor pay" not in labels


def test_monthly_divides_by_12(results):
    annual = {r["label"]: r["amount"] for r in breakdown_rows(results, "annual")}
    monthly = {r["label"]: r["amount"] for r in breakdown_rows(results, "monthly")}

    assert annual["Gross revenue"] == AUD(results.annual_gross_revenue)
    assert monthly["Gross revenue"].whole() == 31_931
    for label, amount in annual.items():
        assert monthly[label].value == pytest.approx(amount.value / 12)


def test_percent_only_on_allocation_rows(results):
    rows = {r["label"]: r for r in breakdown_rows(results)}
    assert rows["Profit"]["percent"] == 5
    assert rows["Owner's pay"]["percent"] == 45
    assert rows["Tax"]["percent"] == 13
    assert rows["Operating expenses"]["percent"] == 37
    assert rows["Gross revenue"]["percent"] is None
    assert rows["Gross revenue"]["emphasized"]
    assert rows["Operating expenses"]["kind"] == "opex"


def test_unknown_view(results):
    with pytest.raises(ValueError, match="Unknown view"):
        breakdown_rows(results, "weekly")


def test_frame(results):
    df = breakdown_frame(results, "annual")
    assert list(df.columns) == ["amount", "percent", "kind", "emphasized"]
    assert df.loc["Real revenue", "amount"] == 333_333
    assert df.loc["GST", "amount"] == 34_833
