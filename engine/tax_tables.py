"""Tax table loading from YAML files."""

import yaml
from decimal import Decimal
from pathlib import Path
from typing import Any, Dict, List, Optional

from engine.errors import InvalidParameter
from engine.tax import TaxTable, validate_slabs
from logger import get_logger
from models.tax_slab import TaxSlab

logger = get_logger()


def _decimal(value: Any) -> Decimal:
    return Decimal(str(value))


class TaxTableLoader:
    """Loads and caches tax tables stored as YAML files."""

    def __init__(self, tables_dir: Optional[Path] = None):
        """Initialize the loader.

        Args:
            tables_dir: Directory containing table YAML files.
                        Defaults to engine/tables/ in the project.
        """
        if tables_dir is None:
            self.tables_dir = Path(__file__).parent / "tables"
        else:
            self.tables_dir = tables_dir

        self._cache: Dict[str, TaxTable] = {}

    def available(self) -> List[str]:
        """Names of the tables found in the tables directory."""
        return sorted(path.stem for path in self.tables_dir.glob("*.yaml"))

    def load(self, table_name: str) -> TaxTable:
        """Load a tax table by name.

        Args:
            table_name: Name of the table file (without .yaml extension).

        Returns:
            Validated TaxTable.

        Raises:
            FileNotFoundError: If the table file doesn't exist.
            yaml.YAMLError: If YAML is invalid.
            InvalidParameter: If the slab table is malformed.
        """
        if table_name in self._cache:
            return self._cache[table_name]

        table_file = self.tables_dir / f"{table_name}.yaml"
        if not table_file.exists():
            raise FileNotFoundError(f"Tax table not found: {table_file}")

        logger.debug(f"Loading tax table from {table_file}")

        with open(table_file, "r") as f:
            data = yaml.safe_load(f)

        table = parse_tax_table(data, default_name=table_name)
        self._cache[table_name] = table
        return table


def parse_tax_table(data: Dict[str, Any], default_name: str = "custom") -> TaxTable:
    """Build a TaxTable from its mapping form.

    Raises:
        InvalidParameter: If a required key is missing or slabs are malformed.
    """
    if not isinstance(data, dict) or "slabs" not in data:
        raise InvalidParameter("slabs", "tax table has no slabs")

    slabs = []
    for raw in data["slabs"]:
        upper = raw.get("upper")
        slabs.append(
            TaxSlab(
                lower_bound=_decimal(raw["lower"]),
                upper_bound=None if upper is None else _decimal(upper),
                rate_percent=_decimal(raw["rate"]),
            )
        )
    validate_slabs(slabs)

    capital_gains = data.get("capital_gains", {})
    return TaxTable(
        name=data.get("name", default_name),
        slabs=slabs,
        crypto_flat_rate_percent=_decimal(data.get("crypto_flat_rate", 0)),
        capital_gains_rate_percent=_decimal(capital_gains.get("rate", 0)),
        capital_gains_exemption=_decimal(capital_gains.get("exemption", 0)),
        section_80c_limit=_decimal(data.get("section_80c_limit", 0)),
    )


_default_loader = TaxTableLoader()


def load_tax_table(table_name: str) -> TaxTable:
    """Load a table from the bundled tables directory."""
    return _default_loader.load(table_name)
