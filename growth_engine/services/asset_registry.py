"""Asset registry — the editable, ordered table of assets.

Names are the keys, so renaming re-keys the mapping. Insertion order is kept
across edits and renames because it decides which slice of the seeded noise
stream each asset receives.
"""
from __future__ import annotations

import logging
from typing import Any

from growth_engine.models.asset import Asset

logger = logging.getLogger(__name__)

BASELINE_NAME = "Baseline (No Scenario)"

_DEFAULT_ASSETS: dict[str, dict[str, Any]] = {
    BASELINE_NAME: dict(
        annual_return=0, volatility=0, drawdown_impact=0,
        crisis_sensitivity=0, color="#000000", is_baseline=True,
    ),
    "BIL (Short-Term Treasuries)": dict(
        annual_return=3, volatility=0.02, drawdown_impact=0.1,
        crisis_sensitivity=0.1, color="#8884d8",
    ),
    "KMLM (Managed Futures)": dict(
        annual_return=4, volatility=0.08, drawdown_impact=0.3,
        crisis_sensitivity=0.5, color="#82ca9d",
    ),
    "SPHD (High-Dividend/Low-Vol)": dict(
        annual_return=6, volatility=0.12, drawdown_impact=0.7,
        crisis_sensitivity=0.8, color="#ffc658",
    ),
    "SWPPX/SPX (S&P 500)": dict(
        annual_return=7, volatility=0.15, drawdown_impact=1.0,
        crisis_sensitivity=1.0, color="#ff7300",
    ),
    "PFF (Preferred Stocks)": dict(
        annual_return=4, volatility=0.1, drawdown_impact=0.8,
        crisis_sensitivity=0.9, color="#00C49F",
    ),
    "VUG (Large-Cap Growth)": dict(
        annual_return=7, volatility=0.18, drawdown_impact=1.2,
        crisis_sensitivity=1.2, color="#0088FE",
    ),
}

_NEW_ASSET_FIELDS: dict[str, Any] = dict(
    annual_return=5, volatility=0.1, drawdown_impact=0.5,
    crisis_sensitivity=1.0, color="#999999",
)

EDITABLE_FIELDS = ("annual_return", "volatility", "drawdown_impact", "crisis_sensitivity", "color")


class AssetError(Exception):
    """Base class for rejected asset edits."""


class AssetNotFoundError(AssetError, KeyError):
    pass


class DuplicateAssetNameError(AssetError, ValueError):
    pass


class InvalidAssetNameError(AssetError, ValueError):
    pass


class BaselineAssetError(AssetError):
    """The baseline asset cannot be renamed, edited, or removed."""


def default_assets() -> dict[str, Asset]:
    """A fresh copy of the built-in asset table."""
    return {name: Asset(**fields) for name, fields in _DEFAULT_ASSETS.items()}


class AssetRegistry:
    """Ordered name -> Asset mapping with validated edits.

    Assets are frozen models; every edit swaps in a new instance, so a
    snapshot taken before an edit is never affected by it.
    """

    def __init__(self, assets: dict[str, Asset] | None = None) -> None:
        self._assets: dict[str, Asset] = dict(assets) if assets is not None else default_assets()

    def __contains__(self, name: str) -> bool:
        return name in self._assets

    def __len__(self) -> int:
        return len(self._assets)

    def names(self) -> list[str]:
        return list(self._assets.keys())

    def get(self, name: str) -> Asset:
        try:
            return self._assets[name]
        except KeyError:
            raise AssetNotFoundError(name) from None

    def snapshot(self) -> dict[str, Asset]:
        """Copy of the current mapping, safe to hand to a simulation run."""
        return dict(self._assets)

    def add(self) -> str:
        """Add an asset with default fields under a generated unique name."""
        n = len(self._assets)
        name = f"New Asset {n}"
        while name in self._assets:
            n += 1
            name = f"New Asset {n}"
        self._assets[name] = Asset(**_NEW_ASSET_FIELDS)
        logger.info("Added asset %r", name)
        return name

    def rename(self, old_name: str, new_name: str) -> None:
        """Re-key an asset, keeping its position in the ordering."""
        asset = self.get(old_name)
        if asset.is_baseline:
            raise BaselineAssetError(f"cannot rename baseline asset {old_name!r}")
        new_name = new_name.strip()
        if not new_name:
            raise InvalidAssetNameError("asset name must not be empty")
        if new_name == old_name:
            return
        if new_name in self._assets:
            raise DuplicateAssetNameError(f"asset {new_name!r} already exists")

        self._assets = {
            (new_name if name == old_name else name): value
            for name, value in self._assets.items()
        }
        logger.info("Renamed asset %r -> %r", old_name, new_name)

    def update_field(self, name: str, field: str, value: Any) -> Asset:
        """Replace one field of an asset, re-validating the result."""
        return self.update(name, {field: value})

    def update(self, name: str, changes: dict[str, Any]) -> Asset:
        """Replace several fields of an asset at once."""
        asset = self.get(name)
        if asset.is_baseline:
            raise BaselineAssetError(f"baseline asset {name!r} is fixed")
        unknown = set(changes) - set(EDITABLE_FIELDS)
        if unknown:
            raise ValueError(f"unknown or read-only asset fields: {sorted(unknown)}")

        data = asset.model_dump()
        data.update(changes)
        updated = Asset.model_validate(data)
        self._assets[name] = updated
        return updated

    def remove(self, name: str) -> bool:
        """Remove an asset. Returns False, leaving the table as is, for the baseline."""
        asset = self.get(name)
        if asset.is_baseline:
            logger.warning("Rejected removal of baseline asset %r", name)
            return False
        del self._assets[name]
        logger.info("Removed asset %r", name)
        return True

    def reset(self) -> None:
        """Restore the built-in asset table."""
        self._assets = default_assets()
