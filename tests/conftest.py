import pytest

from pipelines.normalize import normalize_all


def _row(president, year, **values):
    keys = {
        "gdp": "Nominal GDP (in Millions of R$)",
        "gdp_growth": "Growth rate from a Real GDP",
        "gdp_pc": "Nominal GDP per Capita (in R$)",
        "gdp_pc_growth": "Growth rate from a Real GDP per capita",
        "fx": "Exchange Rate (January,R$/USD)",
        "fx_growth": "Exchange Rate (January,/R$USD) growth",
        "fdi": "Foreign Direct Investment (IED,in Billions of R$)",
        "portfolio": "Foreign Portfolio Investment (USD millions) in the 4th quarter",
        "trade": "Trade Balance Surplus Growth Rate",
        "ipca": "IPCA Inflation Rate (% Annual Variation)",
        "unemployment": "Annual Average Unemployment Rate (%)",
        "wage": "Minimum Wage (in R$)",
        "wage_growth": "Minimum Wage Growth Rate percentage",
        "icv": "Yearly Cost of Living Index (ICV)(Avg. % Change)",
    }
    row = {"Presidents": president, "Year": year}
    row.update({keys[name]: value for name, value in values.items()})
    return row


@pytest.fixture()
def raw_rows():
    return [
        _row(
            "Itamar Franco",
            "1994",
            gdp=349205,
            gdp_growth=5.33,
            gdp_pc="2 226,91",
            gdp_pc_growth=3.68,
            fx=0.0005,
            fx_growth=0.0,
            fdi=2.15,
            portfolio=-1102,
            trade="-3,5",
            ipca=916.46,
            unemployment=5.1,
            wage="70,00",
            wage_growth=0.0,
            icv=1094.87,
        ),
        _row(
            "Fernando Henrique Cardoso",
            "1995",
            gdp=705641,
            gdp_growth=4.42,
            gdp_pc="4 426,47",
            gdp_pc_growth=2.77,
            fx=0.85,
            fx_growth=169900.0,
            fdi=4.4,
            portfolio=2294,
            trade="NA",
            ipca=22.41,
            unemployment=4.6,
            wage="100,00",
            wage_growth=42.86,
            icv=46.19,
        ),
        _row(
            "Fernando Henrique Cardoso",
            "1996",
            gdp=854764,
            gdp_growth=2.21,
            gdp_pc="5 441,88",
            gdp_pc_growth=0.63,
            fx=0.97,
            fx_growth=14.12,
            fdi=10.79,
            portfolio=6051,
            trade="12,5",
            ipca=9.56,
            unemployment=5.4,
            wage="112,00",
            wage_growth=12.0,
            icv=11.26,
        ),
        _row(
            "Jair Bolsonaro",
            "2022",
            gdp=9915316,
            gdp_growth=2.9,
            gdp_pc="46 154,60",
            gdp_pc_growth=2.3,
            fx=5.57,
            fx_growth=1.46,
            fdi=86.05,
            portfolio=3561,
            trade="1,5",
            ipca=5.79,
            unemployment=9.3,
            wage="1.212,00",
            wage_growth=10.18,
            icv=None,
        ),
    ]


@pytest.fixture()
def records(raw_rows):
    return normalize_all(raw_rows)
