"""Sector chips shown by the dashboard.

Industry names follow the provider's screener taxonomy. A sector with no
industry list is unrestricted (all companies).
"""

from dataclasses import dataclass

from compare_api.domain.constants import DEFAULT_TOP_COMPANIES_LIMIT


@dataclass(frozen=True)
class SectorConfig:
    """How to load one sector: display label, industry allow-list, size."""

    label: str
    industries: tuple[str, ...] | None = None
    limit: int = DEFAULT_TOP_COMPANIES_LIMIT

    @property
    def industry_list(self) -> list[str] | None:
        return list(self.industries) if self.industries else None


SECTORS: dict[str, SectorConfig] = {
    "technology": SectorConfig(
        label="Technology",
        industries=(
            "Semiconductors",
            "Software - Infrastructure",
            "Software - Application",
            "Consumer Electronics",
            "Communication Equipment",
            "Computer Hardware",
            "Internet Content & Information",
            "Information Technology Services",
        ),
    ),
    "financials": SectorConfig(
        label="Financials",
        industries=(
            "Banks - Diversified",
            "Banks - Regional",
            "Financial - Credit Services",
            "Asset Management",
            "Insurance - Diversified",
            "Insurance - Property & Casualty",
            "Financial - Capital Markets",
            "Financial - Data & Stock Exchanges",
        ),
    ),
    "healthcare": SectorConfig(
        label="Healthcare",
        industries=(
            "Drug Manufacturers - General",
            "Biotechnology",
            "Medical - Devices",
            "Medical - Healthcare Plans",
            "Medical - Diagnostics & Research",
            "Medical - Instruments & Supplies",
        ),
    ),
    "energy": SectorConfig(
        label="Energy",
        industries=(
            "Oil & Gas Integrated",
            "Oil & Gas Exploration & Production",
            "Oil & Gas Midstream",
            "Oil & Gas Refining & Marketing",
            "Oil & Gas Equipment & Services",
            "Regulated Electric",
            "Renewable Utilities",
        ),
    ),
    "consumer": SectorConfig(
        label="Consumer",
        industries=(
            "Specialty Retail",
            "Discount Stores",
            "Auto - Manufacturers",
            "Restaurants",
            "Beverages - Non-Alcoholic",
            "Household & Personal Products",
            "Apparel - Retail",
            "Entertainment",
        ),
    ),
    "industrials": SectorConfig(
        label="Industrials",
        industries=(
            "Aerospace & Defense",
            "Industrial - Machinery",
            "Railroads",
            "Integrated Freight & Logistics",
            "Agricultural - Machinery",
            "Conglomerates",
        ),
    ),
    "all": SectorConfig(label="All"),
}


def get_sector(key: str) -> SectorConfig:
    """Look up a sector chip by key.

    Raises:
        KeyError: if the key is unknown (message lists the valid keys)
    """
    try:
        return SECTORS[key.strip().lower()]
    except KeyError:
        raise KeyError(f"Unknown sector '{key}'. Choose from: {', '.join(SECTORS)}") from None
