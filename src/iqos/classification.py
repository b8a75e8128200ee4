"""Device tier classification.

The advertised name only identifies IQOS ONE reliably. ILUMA and ILUMA i
holders are told apart by loading values that older firmware never sends.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from .exceptions import NoResponseError, ProtocolError
from .models.enums import DeviceTier
from .protocol.commands import (
    BASELINE_NAME_MARKER,
    HOLDER_PRODUCT_NUMBER_CLASS,
    LOAD_FLEXBATTERY_SIGNAL,
    LOAD_HOLDER_PRODUCT_NUMBER_SIGNAL,
)
from .protocol.responses import parse_flexbattery_response, parse_product_number_response

if TYPE_CHECKING:
    from .transport import BLEConnection

_LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class ClassificationResult:
    """Outcome of classify().

    Attributes:
        tier: Resolved device tier
        holder_product_number: Holder product number read by the first check, if any
    """
    tier: DeviceTier
    holder_product_number: str | None = None


async def classify(
        name: str | None,
        connection: BLEConnection,
        *,
        assume_richer_tier: bool = True,
) -> ClassificationResult:
    """Resolve the tier of a connected device.

    Args:
        name: Advertised local name
        connection: Connected transport used for the tier checks
        assume_richer_tier: Resolve an unanswered check to the richer tier

    Returns:
        ClassificationResult

    Raises:
        TransportError: If a check cannot be written
    """
    if name and BASELINE_NAME_MARKER in name:
        _LOGGER.debug("Name %r identifies IQOS ONE", name)
        return ClassificationResult(DeviceTier.BASELINE)

    # First check: only ILUMA and newer report a holder product number
    try:
        response = await connection.load(LOAD_HOLDER_PRODUCT_NUMBER_SIGNAL)
        holder_product_number = parse_product_number_response(
            response, HOLDER_PRODUCT_NUMBER_CLASS
        )
    except (NoResponseError, ProtocolError) as e:
        tier = DeviceTier.ENHANCED if assume_richer_tier else DeviceTier.BASELINE
        _LOGGER.warning(
            "Product number check inconclusive (%s), assuming %s", e, tier.display_name
        )
        return ClassificationResult(tier)

    # Second check: only ILUMA i answers a FlexBattery load
    try:
        response = await connection.load(LOAD_FLEXBATTERY_SIGNAL)
    except NoResponseError:
        tier = DeviceTier.ENHANCED_PLUS if assume_richer_tier else DeviceTier.ENHANCED
        _LOGGER.warning("FlexBattery check unanswered, assuming %s", tier.display_name)
        return ClassificationResult(tier, holder_product_number)

    try:
        parse_flexbattery_response(response)
    except ProtocolError as e:
        _LOGGER.debug("FlexBattery check rejected: %s", e)
        return ClassificationResult(DeviceTier.ENHANCED, holder_product_number)

    return ClassificationResult(DeviceTier.ENHANCED_PLUS, holder_product_number)
