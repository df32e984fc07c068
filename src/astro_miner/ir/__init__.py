"""Static game data for the asteroid-mining simulation.

Phases, commodities, contractors, catalog targets, news content and the
upgrade tables (research, ownable assets, storage depots) are all
plain Pydantic models and module-level tables.  Nothing here holds mutable
session state.
"""

from .assets import ALL_OWNABLE_ASSETS, AssetCategory, OwnableAsset
from .contractors import (
    CREW_TYPES,
    LAUNCH_PROVIDERS,
    PIRATE_STATS_BY_LEVEL,
    SECURITY_CONTRACTORS,
    CrewType,
    LaunchCadence,
    LaunchProvider,
    PirateStatRange,
    SecurityContractor,
    SecurityTier,
)
from .depots import STORAGE_DEPOTS, StorageDepot
from .news_content import (
    EASTER_EGGS,
    NEWS_COOLDOWNS,
    NEWS_PRIORITY,
    CompetitorAction,
    CompetitorActionType,
    EasterEgg,
    EasterEggState,
    NewsCategory,
)
from .phases import (
    PHASE_TABLE,
    MissionPhase,
    PhaseDefinition,
    PhaseEdge,
    PhaseResolver,
    validate_phase_table,
)
from .resources import COMMODITIES, CommodityDefinition, ResourceType
from .targets import MiningTarget
from .tech import BASE_TECHS, TECH_TREE, TechCategory, TechEffects, TechNode

__all__ = [
    # assets
    "ALL_OWNABLE_ASSETS",
    "AssetCategory",
    "OwnableAsset",
    # contractors
    "CREW_TYPES",
    "LAUNCH_PROVIDERS",
    "PIRATE_STATS_BY_LEVEL",
    "SECURITY_CONTRACTORS",
    "CrewType",
    "LaunchCadence",
    "LaunchProvider",
    "PirateStatRange",
    "SecurityContractor",
    "SecurityTier",
    # depots
    "STORAGE_DEPOTS",
    "StorageDepot",
    # news_content
    "EASTER_EGGS",
    "NEWS_COOLDOWNS",
    "NEWS_PRIORITY",
    "CompetitorAction",
    "CompetitorActionType",
    "EasterEgg",
    "EasterEggState",
    "NewsCategory",
    # phases
    "PHASE_TABLE",
    "MissionPhase",
    "PhaseDefinition",
    "PhaseEdge",
    "PhaseResolver",
    "validate_phase_table",
    # resources
    "COMMODITIES",
    "CommodityDefinition",
    "ResourceType",
    # targets
    "MiningTarget",
    # tech
    "BASE_TECHS",
    "TECH_TREE",
    "TechCategory",
    "TechEffects",
    "TechNode",
]
