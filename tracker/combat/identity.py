"""
Identity keys for combatants.

Every dynamic map of the initiative state is keyed by a string derived from
the static fields of a combatant. Two entries with identical static fields
share a key, which is how copied monster entries end up in the same slot.
"""

import hashlib
import json

from tracker.character.combatant import Combatant

# Length of the hexadecimal digest kept in a key.
KEY_LENGTH = 16


def combatant_key(combatant: Combatant) -> str:
    """
    Computes the identity key of a combatant.

    Args:
        combatant (Combatant):
            The static combatant definition.

    Returns:
        str:
            A stable key built from the name, armor class, hit points, hit
            dice and link of the combatant.

    """
    payload = combatant.model_dump(mode="json", exclude_none=True)
    canonical = json.dumps(payload, sort_keys=True, separators=(",", ":"))
    return hashlib.sha256(canonical.encode("utf-8")).hexdigest()[:KEY_LENGTH]
