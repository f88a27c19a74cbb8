"""Dashboard configuration: status vocabularies, headcount table and thresholds."""

import logging
from dataclasses import dataclass, field, replace
from pathlib import Path

import yaml

from ticket_pipeline.utils.io import load_toml_config

logger = logging.getLogger(__name__)

type ConfigDict = dict[str, str | int | list[str] | list[dict]]

CLOSED_STATUSES = frozenset({
    "done",
    "closed",
    "resuelto",
    "resuelta",
    "solucionado",
    "solucionada",
    "resuelto/a",
    "completado",
    "completada",
})

CANCELED_STATUSES = frozenset({
    "cancelado",
    "cancelada",
    "cancelled",
    "canceled",
    "anulado",
    "anulada",
})


@dataclass(frozen=True)
class TeamSizePeriod:
    """Headcount valid from ``start`` through ``end`` (inclusive ``YYYY-MM``, open-ended if None)."""

    start: str
    end: str | None
    size: int


@dataclass(frozen=True)
class CapacityBands:
    optimal_min: float = 40
    optimal_max: float = 70
    limit_max: float = 95


@dataclass(frozen=True)
class DashboardConfig:
    closed_statuses: frozenset[str] = CLOSED_STATUSES
    canceled_statuses: frozenset[str] = CANCELED_STATUSES
    team_sizes: tuple[TeamSizePeriod, ...] = (
        TeamSizePeriod(start="2024-06", end="2025-06", size=5),
        TeamSizePeriod(start="2025-07", end=None, size=3),
    )
    capacity_bands: CapacityBands = field(default_factory=CapacityBands)
    capacity_window_months: int = 6
    heatmap_months: int = 6
    top_assignees: int = 10
    top_organizations: int = 5
    sla_good_pct: float = 95
    sla_warn_pct: float = 90
    backlog_good_max: int = 25
    backlog_warn_max: int = 60


DEFAULT_CONFIG = DashboardConfig()

_SCALAR_KEYS = (
    "capacity_window_months",
    "heatmap_months",
    "top_assignees",
    "top_organizations",
    "sla_good_pct",
    "sla_warn_pct",
    "backlog_good_max",
    "backlog_warn_max",
)


def _apply_overrides(base: DashboardConfig, data: ConfigDict) -> DashboardConfig:
    """Overlay a plain mapping of settings onto a config."""
    changes: dict = {key: data[key] for key in _SCALAR_KEYS if key in data}

    for key in ("closed_statuses", "canceled_statuses"):
        if key in data:
            changes[key] = frozenset(str(s).strip().lower() for s in data[key])

    if "team_sizes" in data:
        periods = []
        for entry in data["team_sizes"]:
            match entry:
                case {"start": start, "size": size, **rest}:
                    periods.append(TeamSizePeriod(start=start, end=rest.get("end"), size=int(size)))
                case other:
                    raise ValueError(f"Invalid team size period: {other}")
        changes["team_sizes"] = tuple(periods)

    if "capacity_bands" in data:
        changes["capacity_bands"] = CapacityBands(**data["capacity_bands"])

    return replace(base, **changes)


def get_env_config(pyproject: Path | None = None) -> ConfigDict:
    """Read dashboard settings from the ``[tool.ticket_pipeline]`` table of pyproject.toml."""
    if pyproject is None:
        pyproject = Path(__file__).parent.parent / "pyproject.toml"
    if not pyproject.exists():
        return {}
    data = load_toml_config(pyproject)
    return data.get("tool", {}).get("ticket_pipeline", {})


def load_dashboard_config(path: Path | str | None = None) -> DashboardConfig:
    """Build the dashboard config from defaults plus an optional settings file."""
    if path is None:
        return _apply_overrides(DEFAULT_CONFIG, get_env_config())

    path = Path(path)
    match path.suffix:
        case ".yaml" | ".yml":
            with open(path) as f:
                data = yaml.safe_load(f) or {}
        case ".toml":
            raw = load_toml_config(path)
            data = raw.get("tool", {}).get("ticket_pipeline", raw)
        case ext:
            raise ValueError(f"Unsupported config format: {ext}")

    logger.info("Loaded dashboard config overrides from %s", path)
    return _apply_overrides(DEFAULT_CONFIG, data)
