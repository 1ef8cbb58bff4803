from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Optional, Tuple

from ..core.engine import AnchorDefinition
from ..core.types import AnchorRule, FixedRule, Rank, RelativeRule, Rule
from ..core.time import SUNDAY
from .anchors import (
    AnchorOffsetAnchor,
    EasterOffsetAnchor,
    FixedAnchor,
    SundayInWindowAnchor,
    WeekdayAfterAnchor,
)


# ============================================================
# EASTER CYCLE (days relative to Easter Sunday)
# ============================================================

EASTER_OFFSETS: Dict[str, int] = {
    "easter": 0,
    "ash_wednesday": -46,
    "shrove_tuesday": -47,
    "palm_sunday": -7,
    "holy_thursday": -3,
    "good_friday": -2,
    "holy_saturday": -1,
    "divine_mercy_sunday": 7,
    "ascension_thursday": 39,
    "ascension_sunday": 42,
    "pentecost": 49,
    "trinity_sunday": 56,
    "corpus_christi": 60,         # Thursday after Trinity Sunday
    "corpus_christi_sunday": 63,  # transferred form
    "sacred_heart": 68,
    "immaculate_heart": 69,
}


# ============================================================
# FIXED ANCHORS (month, day)
# ============================================================

FIXED_DATES: Dict[str, Tuple[int, int]] = {
    "mary_mother_of_god": (1, 1),
    "epiphany": (1, 6),
    "annunciation": (3, 25),
    "assumption": (8, 15),
    "all_saints": (11, 1),
    "immaculate_conception": (12, 8),
    "christmas_eve": (12, 24),
    "christmas": (12, 25),
    "new_years_eve": (12, 31),
}


# ============================================================
# SEARCHED ANCHORS
# ============================================================

# Sunday within the Octave of Christmas; Dec 30 when Christmas is a Sunday
HOLY_FAMILY = SundayInWindowAnchor(month=12, first_day=26, last_day=31, fallback_day=30)

# Sunday after Epiphany (Jan 6), never Jan 6 itself
BAPTISM_OF_THE_LORD = WeekdayAfterAnchor(month=1, day=6, weekday=SUNDAY, inclusive=False)

# Sunday on or after Nov 27
ADVENT_1 = WeekdayAfterAnchor(month=11, day=27, weekday=SUNDAY, inclusive=True)

CHRIST_KING = AnchorOffsetAnchor(base="advent_1", offset_days=-7)


def _build_all_anchors() -> Dict[str, AnchorDefinition]:
    out: Dict[str, AnchorDefinition] = {}
    for key, offset in EASTER_OFFSETS.items():
        out[key] = EasterOffsetAnchor(offset)
    for key, (month, day) in FIXED_DATES.items():
        out[key] = FixedAnchor(month, day)
    out["holy_family"] = HOLY_FAMILY
    out["baptism_of_the_lord"] = BAPTISM_OF_THE_LORD
    out["advent_1"] = ADVENT_1
    out["christ_king"] = CHRIST_KING
    return out


ALL_ANCHORS: Dict[str, AnchorDefinition] = _build_all_anchors()


# ============================================================
# OBSERVANCE CATALOGUE
# ============================================================

@dataclass(frozen=True)
class ObservanceSpec:
    """A named celebration placed by a rule."""
    id: str
    title: str
    rank: Rank
    rule: Rule
    color: Optional[str] = None


def _fixed(id: str, title: str, rank: Rank, month: int, day: int, color: str = "white") -> ObservanceSpec:
    return ObservanceSpec(id=id, title=title, rank=rank, rule=FixedRule(month, day), color=color)


def _anchored(id: str, title: str, rank: Rank, anchor: str, color: str = "white") -> ObservanceSpec:
    return ObservanceSpec(id=id, title=title, rank=rank, rule=AnchorRule(anchor), color=color)


S, F, M, OM = Rank.SOLEMNITY, Rank.FEAST, Rank.MEMORIAL, Rank.OPTIONAL_MEMORIAL

FIXED_OBSERVANCES: Tuple[ObservanceSpec, ...] = (
    # January
    _fixed("mary_mother_of_god", "Mary, Mother of God", S, 1, 1),
    _fixed("basil_and_gregory", "Saints Basil the Great and Gregory Nazianzen", M, 1, 2),
    _fixed("epiphany", "Epiphany of the Lord", S, 1, 6),
    _fixed("agnes", "Saint Agnes", M, 1, 21, "red"),
    _fixed("conversion_of_paul", "Conversion of Saint Paul", F, 1, 25),
    _fixed("thomas_aquinas", "Saint Thomas Aquinas", M, 1, 28),
    _fixed("john_bosco", "Saint John Bosco", M, 1, 31),
    # February
    _fixed("presentation_of_the_lord", "Presentation of the Lord", F, 2, 2),
    _fixed("blaise", "Saint Blaise", OM, 2, 3, "red"),
    _fixed("our_lady_of_lourdes", "Our Lady of Lourdes", OM, 2, 11),
    _fixed("chair_of_peter", "Chair of Saint Peter", F, 2, 22),
    # March
    _fixed("patrick", "Saint Patrick", OM, 3, 17),
    _fixed("joseph", "Saint Joseph, Spouse of the Blessed Virgin Mary", S, 3, 19),
    _fixed("annunciation", "Annunciation of the Lord", S, 3, 25),
    # April / May
    _fixed("mark", "Saint Mark, Evangelist", F, 4, 25, "red"),
    _fixed("joseph_the_worker", "Saint Joseph the Worker", OM, 5, 1),
    _fixed("philip_and_james", "Saints Philip and James, Apostles", F, 5, 3, "red"),
    _fixed("our_lady_of_fatima", "Our Lady of Fatima", OM, 5, 13),
    _fixed("matthias", "Saint Matthias, Apostle", F, 5, 14, "red"),
    _fixed("visitation", "Visitation of the Blessed Virgin Mary", F, 5, 31),
    # June
    _fixed("anthony_of_padua", "Saint Anthony of Padua", M, 6, 13),
    _fixed("nativity_of_john_the_baptist", "Nativity of Saint John the Baptist", S, 6, 24),
    _fixed("peter_and_paul", "Saints Peter and Paul, Apostles", S, 6, 29, "red"),
    # July
    _fixed("thomas", "Saint Thomas, Apostle", F, 7, 3, "red"),
    _fixed("benedict", "Saint Benedict", M, 7, 11),
    _fixed("our_lady_of_mount_carmel", "Our Lady of Mount Carmel", OM, 7, 16),
    _fixed("mary_magdalene", "Saint Mary Magdalene", F, 7, 22),
    _fixed("james", "Saint James, Apostle", F, 7, 25, "red"),
    _fixed("joachim_and_anne", "Saints Joachim and Anne", M, 7, 26),
    _fixed("ignatius_of_loyola", "Saint Ignatius of Loyola", M, 7, 31),
    # August
    _fixed("transfiguration", "Transfiguration of the Lord", F, 8, 6),
    _fixed("dominic", "Saint Dominic", M, 8, 8),
    _fixed("clare", "Saint Clare", M, 8, 11),
    _fixed("maximilian_kolbe", "Saint Maximilian Kolbe", M, 8, 14, "red"),
    _fixed("assumption", "Assumption of the Blessed Virgin Mary", S, 8, 15),
    _fixed("queenship_of_mary", "Queenship of the Blessed Virgin Mary", M, 8, 22),
    _fixed("bartholomew", "Saint Bartholomew, Apostle", F, 8, 24, "red"),
    _fixed("monica", "Saint Monica", M, 8, 27),
    _fixed("augustine", "Saint Augustine", M, 8, 28),
    # September
    _fixed("nativity_of_mary", "Nativity of the Blessed Virgin Mary", F, 9, 8),
    _fixed("exaltation_of_the_cross", "Exaltation of the Holy Cross", F, 9, 14, "red"),
    _fixed("our_lady_of_sorrows", "Our Lady of Sorrows", M, 9, 15),
    _fixed("matthew", "Saint Matthew, Apostle and Evangelist", F, 9, 21, "red"),
    _fixed("pio_of_pietrelcina", "Saint Pio of Pietrelcina", M, 9, 23),
    _fixed("vincent_de_paul", "Saint Vincent de Paul", M, 9, 27),
    _fixed("archangels", "Saints Michael, Gabriel and Raphael, Archangels", F, 9, 29),
    # October
    _fixed("therese_of_lisieux", "Saint Thérèse of the Child Jesus", M, 10, 1),
    _fixed("guardian_angels", "Guardian Angels", M, 10, 2),
    _fixed("francis_of_assisi", "Saint Francis of Assisi", M, 10, 4),
    _fixed("our_lady_of_the_rosary", "Our Lady of the Rosary", M, 10, 7),
    _fixed("teresa_of_avila", "Saint Teresa of Jesus", M, 10, 15),
    _fixed("luke", "Saint Luke, Evangelist", F, 10, 18, "red"),
    _fixed("simon_and_jude", "Saints Simon and Jude, Apostles", F, 10, 28, "red"),
    # November
    _fixed("all_saints", "All Saints", S, 11, 1),
    _fixed("all_souls", "Commemoration of All the Faithful Departed", F, 11, 2, "violet"),
    _fixed("dedication_of_the_lateran", "Dedication of the Lateran Basilica", F, 11, 9),
    _fixed("martin_of_tours", "Saint Martin of Tours", M, 11, 11),
    _fixed("cecilia", "Saint Cecilia", M, 11, 22, "red"),
    _fixed("andrew", "Saint Andrew, Apostle", F, 11, 30, "red"),
    # December
    _fixed("immaculate_conception", "Immaculate Conception of the Blessed Virgin Mary", S, 12, 8),
    _fixed("juan_diego", "Saint Juan Diego", OM, 12, 9),
    _fixed("our_lady_of_guadalupe", "Our Lady of Guadalupe", F, 12, 12),
    _fixed("lucy", "Saint Lucy", M, 12, 13, "red"),
    _fixed("john_of_the_cross", "Saint John of the Cross", M, 12, 14),
    _fixed("christmas", "Nativity of the Lord (Christmas)", S, 12, 25),
    _fixed("stephen", "Saint Stephen, First Martyr", F, 12, 26, "red"),
    _fixed("john_the_apostle", "Saint John, Apostle and Evangelist", F, 12, 27),
    _fixed("holy_innocents", "Holy Innocents", F, 12, 28, "red"),
)

MOVABLE_OBSERVANCES: Tuple[ObservanceSpec, ...] = (
    _anchored("baptism_of_the_lord", "Baptism of the Lord", F, "baptism_of_the_lord"),
    _anchored("ash_wednesday", "Ash Wednesday", S, "ash_wednesday", "violet"),
    _anchored("palm_sunday", "Palm Sunday of the Passion of the Lord", Rank.SUNDAY, "palm_sunday", "red"),
    _anchored("holy_thursday", "Holy Thursday (Evening Mass of the Lord's Supper)", Rank.TRIDUUM, "holy_thursday"),
    _anchored("good_friday", "Good Friday of the Passion of the Lord", Rank.TRIDUUM, "good_friday", "red"),
    _anchored("holy_saturday", "Holy Saturday (Easter Vigil)", Rank.TRIDUUM, "holy_saturday"),
    _anchored("easter_sunday", "Easter Sunday of the Resurrection of the Lord", Rank.TRIDUUM, "easter"),
    _anchored("ascension", "Ascension of the Lord", S, "ascension_thursday"),
    _anchored("pentecost", "Pentecost Sunday", S, "pentecost", "red"),
    ObservanceSpec(
        id="mary_mother_of_the_church",
        title="Blessed Virgin Mary, Mother of the Church",
        rank=M,
        rule=RelativeRule(anchor="pentecost", offset_days=1),
        color="white",
    ),
    _anchored("trinity_sunday", "Most Holy Trinity", S, "trinity_sunday"),
    _anchored("corpus_christi", "Most Holy Body and Blood of Christ", S, "corpus_christi"),
    _anchored("sacred_heart", "Most Sacred Heart of Jesus", S, "sacred_heart"),
    _anchored("immaculate_heart", "Immaculate Heart of the Blessed Virgin Mary", M, "immaculate_heart"),
    _anchored("christ_king", "Our Lord Jesus Christ, King of the Universe", S, "christ_king"),
    _anchored("holy_family", "Holy Family of Jesus, Mary and Joseph", F, "holy_family"),
)

OBSERVANCE_CATALOGUE: Tuple[ObservanceSpec, ...] = FIXED_OBSERVANCES + MOVABLE_OBSERVANCES
