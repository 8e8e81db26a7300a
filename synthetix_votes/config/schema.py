"""
JSON Configuration Schema for the voting strategy.

Holds every constant that has to be maintained by hand between votes:
- Primary chain contract addresses (SynthetixState, DebtCache)
- Subgraph endpoints for both chains
- Secondary chain debt figures, c-ratio normalization and block number
- Subgraph query settings

Usage:
- Defaults come from config.settings (environment overridable)
- A JSON file can override any subset of fields
- validate_config() reports problems before a vote is scored
"""

from typing import Dict, Any, List, Optional
from dataclasses import dataclass, field, asdict, fields
import json

from web3 import Web3

from . import settings

MAX_QUERY_FIRST = 1000


@dataclass
class StrategyConfig:
    """
    Complete configuration for one scoring run.

    The secondary chain values are not read from chain; they are copied in by
    hand and go stale as soon as the secondary chain moves on.
    """

    # =========================================================================
    # SECTION 1: Primary chain contracts
    # =========================================================================
    synthetix_state_address: str = settings.SYNTHETIX_STATE_ADDRESS
    debt_cache_address: str = settings.DEBT_CACHE_ADDRESS

    # =========================================================================
    # SECTION 2: Subgraph endpoints
    # =========================================================================
    primary_subgraph_url: str = settings.DEFAULT_GRAPHS[settings.PRIMARY_CHAIN_ID]
    secondary_subgraph_url: str = settings.DEFAULT_GRAPHS[settings.SECONDARY_CHAIN_ID]

    # =========================================================================
    # SECTION 3: Secondary chain constants
    # =========================================================================
    total_secondary_debt: float = settings.SECONDARY_CONSTANTS["total_secondary_debt"]
    secondary_last_debt_ledger_entry: int = settings.SECONDARY_CONSTANTS["secondary_last_debt_ledger_entry"]
    secondary_c_ratio_normalization: float = settings.SECONDARY_CONSTANTS["secondary_c_ratio_normalization"]
    secondary_block_number: int = settings.SECONDARY_CONSTANTS["secondary_block_number"]

    # =========================================================================
    # SECTION 4: Query settings
    # =========================================================================
    query_first: int = settings.QUERY_CONFIG["first"]
    query_timeout: int = settings.QUERY_CONFIG["timeout"]
    strict: bool = settings.QUERY_CONFIG["strict"]

    # Free-form notes (e.g. where the secondary constants were read from)
    notes: Dict[str, str] = field(default_factory=dict)

    @property
    def scaled_total_secondary_debt(self) -> float:
        """Secondary chain debt expressed in primary chain c-ratio terms."""
        return self.total_secondary_debt * self.secondary_c_ratio_normalization

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return asdict(self)

    def to_json(self, indent: int = 2) -> str:
        """Convert to JSON string."""
        return json.dumps(self.to_dict(), indent=indent, default=str)

    @classmethod
    def from_settings(cls) -> "StrategyConfig":
        """Defaults from config.settings."""
        return cls()

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "StrategyConfig":
        """Create from dictionary (e.g., loaded from JSON). Unknown keys are rejected."""
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ValueError(f"Unknown configuration fields: {unknown}")

        data = dict(data)
        # Ledger entries overflow JSON number precision, so strings are accepted
        if "secondary_last_debt_ledger_entry" in data:
            data["secondary_last_debt_ledger_entry"] = int(data["secondary_last_debt_ledger_entry"])
        if "secondary_block_number" in data:
            data["secondary_block_number"] = int(data["secondary_block_number"])
        if "total_secondary_debt" in data:
            data["total_secondary_debt"] = float(data["total_secondary_debt"])
        if "secondary_c_ratio_normalization" in data:
            data["secondary_c_ratio_normalization"] = _parse_ratio(data["secondary_c_ratio_normalization"])

        return cls(**data)

    @classmethod
    def from_json(cls, json_str: str) -> "StrategyConfig":
        """Create from JSON string."""
        data = json.loads(json_str)
        return cls.from_dict(data)

    @classmethod
    def from_json_file(cls, file_path: str) -> "StrategyConfig":
        """Create from JSON file."""
        with open(file_path, "r") as f:
            data = json.load(f)
        return cls.from_dict(data)


def _parse_ratio(value: Any) -> float:
    """Accept 1.333 or "600/450"."""
    if isinstance(value, str) and "/" in value:
        numerator, denominator = value.split("/", 1)
        return float(numerator) / float(denominator)
    return float(value)


# =============================================================================
# VALIDATION
# =============================================================================

def validate_config(config: StrategyConfig) -> Dict[str, Any]:
    """
    Validate configuration and return validation results.

    Returns:
        Dict with:
        - is_valid: bool
        - errors: List of error messages
        - warnings: List of warning messages
    """
    errors: List[str] = []
    warnings: List[str] = []

    for name in ("synthetix_state_address", "debt_cache_address"):
        value = getattr(config, name)
        if not value or not Web3.is_address(value.lower()):
            errors.append(f"{name} is not a valid address: {value!r}")

    for name in ("primary_subgraph_url", "secondary_subgraph_url"):
        value = getattr(config, name)
        if not value:
            errors.append(f"{name} is required")
        elif not value.startswith(("http://", "https://")):
            errors.append(f"{name} must be an http(s) URL: {value!r}")

    if config.total_secondary_debt < 0:
        errors.append("total_secondary_debt cannot be negative")
    if config.secondary_last_debt_ledger_entry <= 0:
        errors.append("secondary_last_debt_ledger_entry must be positive")
    if config.secondary_c_ratio_normalization <= 0:
        errors.append("secondary_c_ratio_normalization must be positive")
    if config.secondary_block_number <= 0:
        errors.append("secondary_block_number must be positive")

    if not 1 <= config.query_first <= MAX_QUERY_FIRST:
        errors.append(f"query_first must be between 1 and {MAX_QUERY_FIRST}")
    if config.query_timeout <= 0:
        errors.append("query_timeout must be positive")

    warnings.append(
        f"Secondary chain constants are pinned to block {config.secondary_block_number}; "
        "update them for each snapshot"
    )
    if config.total_secondary_debt == 0:
        warnings.append("total_secondary_debt is 0 - secondary chain debt is ignored")

    return {
        "is_valid": len(errors) == 0,
        "errors": errors,
        "warnings": warnings,
    }


def load_config(file_path: Optional[str] = None) -> StrategyConfig:
    """Load a config file, or the settings defaults when no path is given."""
    if file_path:
        return StrategyConfig.from_json_file(file_path)
    return StrategyConfig.from_settings()
