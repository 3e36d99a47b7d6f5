import pytest

from src.tour_office.tour_office.rates.parsing import parse_decimal_smart, parse_tcmb_xml, positive_or_zero


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("1.234,56", 1234.56),
        ("1,234.56", 1234.56),
        ("12,50", 12.5),
        ("34.1234", 34.1234),
        (" 9 ,25 ", 9.25),
        ("", 0.0),
        (None, 0.0),
        ("abc", 0.0),
    ],
)
def test_parse_decimal_smart(raw, expected):
    assert parse_decimal_smart(raw) == pytest.approx(expected)


TCMB_XML = """<?xml version="1.0" encoding="UTF-8"?>
<Tarih_Date Tarih="01.03.2026">
  <Currency CrossOrder="0" Kod="USD" CurrencyCode="USD">
    <Unit>1</Unit>
    <ForexBuying>36.1000</ForexBuying>
    <ForexSelling>36.2000</ForexSelling>
  </Currency>
  <Currency CrossOrder="1" Kod="JPY" CurrencyCode="JPY">
    <Unit>100</Unit>
    <ForexSelling>24.0000</ForexSelling>
  </Currency>
  <Currency CrossOrder="12" Kod="SAR" CurrencyCode="SAR">
    <Unit>1</Unit>
    <ForexSelling></ForexSelling>
    <BanknoteSelling>9,6500</BanknoteSelling>
  </Currency>
</Tarih_Date>
"""


def test_parse_tcmb_xml_reads_usd_and_falls_back_to_banknote_for_sar():
    usd, sar = parse_tcmb_xml(TCMB_XML)
    assert usd == pytest.approx(36.2)
    assert sar == pytest.approx(9.65)


def test_parse_tcmb_xml_divides_by_unit():
    xml = '<Currency Kod="USD"><Unit>10</Unit><ForexSelling>362.0</ForexSelling></Currency>'
    usd, sar = parse_tcmb_xml(xml)
    assert usd == pytest.approx(36.2)
    assert sar == 0.0


def test_parse_tcmb_xml_garbage_gives_zeros():
    assert parse_tcmb_xml("<html>bakımda</html>") == (0.0, 0.0)
    assert parse_tcmb_xml("") == (0.0, 0.0)


@pytest.mark.parametrize("value, expected", [(36.5, 36.5), ("9.1", 9.1), (0, 0.0), (-1, 0.0), (None, 0.0), ("x", 0.0)])
def test_positive_or_zero(value, expected):
    assert positive_or_zero(value) == pytest.approx(expected)
