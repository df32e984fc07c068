"""Static news content: categories, cooldowns, text pools and easter eggs.

Everything in this module is data.  The stateful side of the news feed
(cooldown tracking, blocked targets, fired eggs) lives in
:mod:`astro_miner.sim.news`.
"""

from __future__ import annotations

from enum import Enum
from typing import Callable

from pydantic import BaseModel, ConfigDict

from astro_miner.ir.resources import ResourceType


class NewsCategory(str, Enum):
    """News categories, declared from most to least urgent."""

    CRITICAL = "critical"
    IMPORTANT = "important"
    MARKET = "market"
    COMPETITOR = "competitor"
    EDUCATIONAL = "educational"
    FLAVOR = "flavor"


# Lower value = shown sooner.
NEWS_PRIORITY: dict[NewsCategory, int] = {
    NewsCategory.CRITICAL: 0,
    NewsCategory.IMPORTANT: 1,
    NewsCategory.MARKET: 2,
    NewsCategory.COMPETITOR: 3,
    NewsCategory.EDUCATIONAL: 4,
    NewsCategory.FLAVOR: 5,
}

# Minimum simulated days between two items of the same category.
NEWS_COOLDOWNS: dict[NewsCategory, float] = {
    NewsCategory.CRITICAL: 0.0,
    NewsCategory.IMPORTANT: 0.5,
    NewsCategory.MARKET: 1.0,
    NewsCategory.COMPETITOR: 3.5,
    NewsCategory.EDUCATIONAL: 0.7,
    NewsCategory.FLAVOR: 1.4,
}


# =====================================================================
# Educational and flavor pools
# =====================================================================

EDUCATIONAL_NEWS: list[str] = [
    "FUN FACT: Asteroid 16 Psyche may contain $10 quintillion in metal",
    "DID YOU KNOW: Main belt contains 1-2 million asteroids larger than 1km",
    "SCIENCE: C-type asteroids are the oldest objects in the solar system",
    "ASTRONOMY: Jupiter's gravity creates Kirkwood gaps in the asteroid belt",
    "HISTORY: First asteroid Ceres discovered in 1801 by Giuseppe Piazzi",
    "PHYSICS: Hohmann transfers are the most fuel-efficient orbital maneuvers",
    "SPACE: Communication with asteroid belt missions has 20+ minute delay",
    "FUN FACT: S-type asteroids are rich in silicates and metals",
    "SCIENCE: M-type asteroids are mostly iron and nickel - valuable for construction",
    "HISTORY: The term 'asteroid' means 'star-like' in Greek",
    "PHYSICS: Asteroids have very low gravity - jumping could launch you into orbit",
    "ASTRONOMY: The asteroid belt contains only 4% of the Moon's mass combined",
]

FLAVOR_NEWS: list[str] = [
    "Mars colonists vote pineapple officially banned from space pizza",
    "Lunar tourist complains about 'false advertising' in low gravity wedding photos",
    "ISS crew reports coffee tastes 'weird' - investigation finds nothing unusual",
    "Asteroid named after celebrity already being mined by fans",
    "Space insurance rates drop to 'merely absurd' following quiet quarter",
    "Belt miner sets record for longest poker game - 14 months in transit",
    "Jovian moon colonists petition for time zone recognition",
    "Cosmic Jack's pirate crew spotted wearing surprisingly tasteful matching uniforms",
    "Edward Thatch denies retirement rumors, says 'still plenty of belts to plunder'",
    "Venture capitalists excited about 'Uber but for asteroid mining'",
    "Tech billionaire's personal asteroid mine 'not a tax dodge' says lawyer",
    "Space dating app launches 'orbital compatibility' matching algorithm",
    "Martian weather report: Dusty with a chance of dust",
    "Zero-G sports league announces 3D chess now requires actual 3D board",
    "Conspiracy theorist insists Pluto 'still a planet, wake up sheeple'",
    "Robot vendor recalls mining bots after 'overly enthusiastic drilling incidents'",
    "SpaceY announces reusable rockets will now be 'even more reusable'",
    "Astronomer discovers asteroid shaped exactly like a potato - names it 'Potato'",
    "Belt miner's cat becomes first feline to visit 100 asteroids",
]


# =====================================================================
# Competitors
# =====================================================================

class Competitor(BaseModel):
    name: str
    ceo: str | None = None


COMPETITORS: list[Competitor] = [
    Competitor(name="Rock Lobster Industries", ceo="Kiki Lobster"),
    Competitor(name="Solar System Quarry and Drill", ceo="Reginald P. Stone"),
    Competitor(name="Belt Brothers Salvage"),
    Competitor(name="Cosmic Extraction Corp", ceo="Luna Starfield"),
    Competitor(name="Deep Space Mining Co"),
]


class CompetitorActionType(str, Enum):
    LAUNCH_SWARM = "launch_swarm"
    ESTABLISH_OUTPOST = "establish_outpost"
    SPOTTED_NEAR = "spotted_near"
    CEO_STATEMENT = "ceo_statement"
    FAILED_DELIVERY = "failed_delivery"


class CompetitorAction(BaseModel):
    """An archetype of competitor activity and its headline templates.

    Templates may reference ``{competitor}``, ``{ceo}`` and ``{target}``.
    """

    action_type: CompetitorActionType
    blocks_target: bool
    """If set, the named target becomes permanently unavailable."""

    templates: list[str]


COMPETITOR_ACTIONS: list[CompetitorAction] = [
    CompetitorAction(
        action_type=CompetitorActionType.LAUNCH_SWARM,
        blocks_target=True,
        templates=[
            "{competitor} launches swarm to {target} - no permits filed",
            "{competitor} begins mining operations at {target}",
            "{competitor} claims exclusive rights to {target}",
        ],
    ),
    CompetitorAction(
        action_type=CompetitorActionType.ESTABLISH_OUTPOST,
        blocks_target=True,
        templates=[
            "{competitor} sets up permanent outpost at {target}",
            "{competitor} establishes mining base on {target}",
        ],
    ),
    CompetitorAction(
        action_type=CompetitorActionType.SPOTTED_NEAR,
        blocks_target=False,
        templates=[
            "{competitor} spotted near {target}",
            "{competitor} survey ships detected in {target} vicinity",
        ],
    ),
    CompetitorAction(
        action_type=CompetitorActionType.CEO_STATEMENT,
        blocks_target=False,
        templates=[
            "{ceo} claims 'revolutionary nano-miner breakthrough' on social media",
            "{ceo} testifies before Congress on mining safety regulations",
            "{ceo} announces quarterly earnings beat expectations",
        ],
    ),
    CompetitorAction(
        action_type=CompetitorActionType.FAILED_DELIVERY,
        blocks_target=False,
        templates=[
            "{competitor} failed to deliver on ESA contract - spot prices rising",
            "{competitor} mission to {target} ends in failure",
        ],
    ),
]

UNKNOWN_TARGET_NAME = "unknown location"


# =====================================================================
# Market headlines (qualitative, no percentage)
# =====================================================================

MARKET_NEWS_TEMPLATES: dict[tuple[ResourceType, str], list[str]] = {
    (ResourceType.WATER, "up"): [
        "Water futures spike - space station consortium buying aggressively",
        "Water prices surge following life support system expansions",
    ],
    (ResourceType.WATER, "down"): [
        "Water prices fall as ice mining operations ramp up",
        "Comet harvest floods water market - prices tumble",
    ],
    (ResourceType.LITHIUM, "up"): [
        "Lithium prices surge following Earth-side battery shortage",
        "Lithium demand spikes as orbital factories expand",
    ],
    (ResourceType.LITHIUM, "down"): [
        "Lithium oversupply crashes market prices",
        "New battery tech reduces lithium demand - prices fall",
    ],
    (ResourceType.PLATINUM, "up"): [
        "Platinum prices surge on catalyst demand",
        "Platinum shortage drives prices to yearly highs",
    ],
    (ResourceType.PLATINUM, "down"): [
        "Platinum market crashes as competitor floods supply",
        "Platinum glut from main belt operations depresses prices",
    ],
    (ResourceType.IRON, "up"): [
        "Iron prices rise on orbital construction boom",
        "Station building drives iron demand higher",
    ],
    (ResourceType.IRON, "down"): [
        "Iron surplus from M-type asteroids weighs on prices",
        "Iron prices fall as supply exceeds demand",
    ],
    (ResourceType.NICKEL, "up"): [
        "Nickel prices climb on battery alloy demand",
        "Nickel shortage reported - prices trending up",
    ],
    (ResourceType.NICKEL, "down"): [
        "Nickel market softens as stockpiles grow",
        "Nickel prices ease following large delivery",
    ],
    (ResourceType.GOLD, "up"): [
        "Gold prices rally as safe-haven demand increases",
        "Gold hits new highs on electronics demand",
    ],
    (ResourceType.GOLD, "down"): [
        "Gold prices retreat after asteroid discovery announcement",
        "Gold surplus depresses precious metals market",
    ],
    (ResourceType.RARE_EARTH, "up"): [
        "Rare earth metals surge on tech sector demand",
        "Rare earth shortage threatens electronics production",
    ],
    (ResourceType.RARE_EARTH, "down"): [
        "Rare earth metals stabilize after volatile trading week",
        "Rare earth prices ease as new sources come online",
    ],
    (ResourceType.VOLATILES, "up"): [
        "Volatiles prices rise on fuel refinery demand",
        "Ammonia and methane prices spike - refueling stations buying",
    ],
    (ResourceType.VOLATILES, "down"): [
        "Volatiles market softens as C-type mining increases",
        "Fuel prices fall on abundant supply",
    ],
}


# =====================================================================
# Easter eggs
# =====================================================================

class EasterEggState(BaseModel):
    """The slice of game state easter-egg predicates look at."""

    model_config = ConfigDict(frozen=True)

    game_month: int
    """1-12."""

    game_day: int
    """1-31."""

    missions_completed: int = 0
    balance: float = 0.0


class EasterEgg(BaseModel):
    """A one-shot message armed on the rising edge of ``condition``."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    egg_id: str
    condition: Callable[[EasterEggState], bool]
    message: str
    category: NewsCategory


def _on_date(month: int, day: int) -> Callable[[EasterEggState], bool]:
    return lambda s: s.game_month == month and s.game_day == day


EASTER_EGGS: list[EasterEgg] = [
    EasterEgg(
        egg_id="april_fools",
        condition=_on_date(4, 1),
        message="Scientists confirm space is real, not elaborate prank",
        category=NewsCategory.FLAVOR,
    ),
    EasterEgg(
        egg_id="christmas",
        condition=_on_date(12, 25),
        message="NORAD tracks Santa's sleigh passing through asteroid belt",
        category=NewsCategory.FLAVOR,
    ),
    EasterEgg(
        egg_id="moon_landing",
        condition=_on_date(7, 20),
        message="Celebrating moon landing anniversary - 10% off lunar contracts today!",
        category=NewsCategory.IMPORTANT,
    ),
    EasterEgg(
        egg_id="century_club",
        condition=lambda s: s.missions_completed == 100,
        message="\U0001f389 Century Club! You've completed 100 missions!",
        category=NewsCategory.IMPORTANT,
    ),
    EasterEgg(
        egg_id="bankruptcy",
        condition=lambda s: s.balance <= 0,
        message="Financial experts baffled by your 'bold strategy'",
        category=NewsCategory.FLAVOR,
    ),
    EasterEgg(
        egg_id="billionaire",
        condition=lambda s: s.balance >= 1_000_000_000,
        message="\U0001f680 BILLIONAIRE STATUS! Your company is now worth over $1 billion!",
        category=NewsCategory.IMPORTANT,
    ),
    EasterEgg(
        egg_id="trillionaire",
        condition=lambda s: s.balance >= 1_000_000_000_000,
        message="\U0001f451 TRILLIONAIRE! You've achieved the ultimate goal!",
        category=NewsCategory.CRITICAL,
    ),
]

EASTER_EGG_IDS: frozenset[str] = frozenset(egg.egg_id for egg in EASTER_EGGS)
