"""Export simulation results as CSV text or Excel workbooks."""
from __future__ import annotations

import logging
from io import BytesIO

import pandas as pd

from growth_engine.config import settings
from growth_engine.models.results import SimulationResult

logger = logging.getLogger(__name__)


def trajectory_frame(result: SimulationResult) -> pd.DataFrame:
    """One row per year ("Year 0".."Year N"), one column per asset."""
    frame = pd.DataFrame(result.trajectory)
    frame.index = [f"Year {i}" for i in range(len(frame))]
    frame.index.name = "year"
    return frame


def metrics_frame(result: SimulationResult) -> pd.DataFrame:
    """One row per non-baseline asset with CAGR, volatility, and max drawdown."""
    rows = {
        name: {"cagr": m.cagr, "volatility": m.volatility, "max_drawdown": m.max_drawdown}
        for name, m in result.metrics.items()
    }
    frame = pd.DataFrame.from_dict(rows, orient="index", columns=["cagr", "volatility", "max_drawdown"])
    frame.index.name = "asset"
    return frame


def to_csv(result: SimulationResult) -> str:
    """Trajectory table as CSV text."""
    return trajectory_frame(result).to_csv()


def to_excel(result: SimulationResult) -> bytes:
    """Workbook with a trajectory sheet and a metrics sheet."""
    prefix = settings.EXPORT_SHEET_PREFIX
    buffer = BytesIO()
    with pd.ExcelWriter(buffer, engine="openpyxl") as writer:
        trajectory_frame(result).to_excel(writer, sheet_name=f"{prefix}Trajectory")
        metrics_frame(result).to_excel(writer, sheet_name=f"{prefix}Metrics")
    logger.info(
        "Exported %d years x %d assets to Excel",
        len(result.trajectory), len(result.trajectory[0]) if result.trajectory else 0,
    )
    return buffer.getvalue()
