from darkomen.arm.arm import Army, decode, normalize_books_path
from darkomen.arm.regiment import (
    UNUSABLE_SLOT, Alignment, Leader, Regiment, RegimentRace, RegimentType,
    TroopAttributes, race_label, regiment_race, regiment_type, threat_level,
    type_label,
)

__all__ = [
    "UNUSABLE_SLOT", "Alignment", "Army", "Leader", "Regiment", "RegimentRace",
    "RegimentType", "TroopAttributes", "decode", "normalize_books_path",
    "race_label", "regiment_race", "regiment_type", "threat_level", "type_label",
]
