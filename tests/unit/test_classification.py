"""Test device tier classification."""

from __future__ import annotations

import pytest

from iqos.classification import ClassificationResult, classify
from iqos.exceptions import BLEConnectionError, NoResponseError
from iqos.models.enums import DeviceTier
from iqos.protocol.commands import LOAD_FLEXBATTERY_SIGNAL, LOAD_HOLDER_PRODUCT_NUMBER_SIGNAL

_MALFORMED = bytes([0x00, 0x00, 0x00, 0x00, 0x00, 0x00, 0x00])


class _FakeConnection:
    """Answers load() from a list; exception instances are raised."""

    def __init__(self, responses: list[bytes | Exception] | None = None):
        self._responses = list(responses or [])
        self.loads: list[bytes] = []

    async def load(self, request: bytes, timeout: float | None = None) -> bytes:
        self.loads.append(request)
        if not self._responses:
            raise RuntimeError("No fake responses left")
        response = self._responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return response


class TestClassifyByName:
    """Test name based classification."""

    @pytest.mark.asyncio
    @pytest.mark.parametrize("name", ["IQOS ONE", "IQOS 3 DUO ONE", "ONE 1234"])
    async def test_one_needs_no_loads(self, name):
        fake = _FakeConnection()
        result = await classify(name, fake)
        assert result == ClassificationResult(DeviceTier.BASELINE)
        assert fake.loads == []


class TestClassifyByLoads:
    """Test load based classification."""

    @pytest.mark.asyncio
    async def test_enhanced_plus(self, holder_product_number_response, flexbattery_eco_response):
        fake = _FakeConnection([holder_product_number_response, flexbattery_eco_response])
        result = await classify("IQOS ILUMA i", fake)
        assert result.tier is DeviceTier.ENHANCED_PLUS
        assert result.holder_product_number == "DK000123"
        assert fake.loads == [LOAD_HOLDER_PRODUCT_NUMBER_SIGNAL, LOAD_FLEXBATTERY_SIGNAL]

    @pytest.mark.asyncio
    async def test_enhanced_when_flexbattery_malformed(self, holder_product_number_response):
        fake = _FakeConnection([holder_product_number_response, _MALFORMED])
        result = await classify("IQOS ILUMA", fake)
        assert result.tier is DeviceTier.ENHANCED
        assert result.holder_product_number == "DK000123"

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "assume_richer_tier,expected",
        [(True, DeviceTier.ENHANCED), (False, DeviceTier.BASELINE)],
    )
    async def test_malformed_product_number_is_inconclusive(self, assume_richer_tier, expected):
        fake = _FakeConnection([_MALFORMED])
        result = await classify("IQOS", fake, assume_richer_tier=assume_richer_tier)
        assert result == ClassificationResult(expected)
        assert fake.loads == [LOAD_HOLDER_PRODUCT_NUMBER_SIGNAL]

    @pytest.mark.asyncio
    async def test_stray_notification_does_not_demote_iluma(self, vibration_all_on_response):
        """An unrelated frame answering the product number load keeps the richer tier."""
        fake = _FakeConnection([vibration_all_on_response])
        result = await classify("IQOS ILUMA", fake, assume_richer_tier=True)
        assert result.tier is DeviceTier.ENHANCED
        assert result.holder_product_number is None

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "assume_richer_tier,expected",
        [(True, DeviceTier.ENHANCED), (False, DeviceTier.BASELINE)],
    )
    async def test_unanswered_product_number(self, assume_richer_tier, expected):
        fake = _FakeConnection([NoResponseError("timeout")])
        result = await classify("IQOS", fake, assume_richer_tier=assume_richer_tier)
        assert result.tier is expected
        assert len(fake.loads) == 1

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "assume_richer_tier,expected",
        [(True, DeviceTier.ENHANCED_PLUS), (False, DeviceTier.ENHANCED)],
    )
    async def test_unanswered_flexbattery(
            self, holder_product_number_response, assume_richer_tier, expected
    ):
        fake = _FakeConnection([holder_product_number_response, NoResponseError("timeout")])
        result = await classify("IQOS", fake, assume_richer_tier=assume_richer_tier)
        assert result.tier is expected
        assert result.holder_product_number == "DK000123"

    @pytest.mark.asyncio
    async def test_transport_error_propagates(self):
        fake = _FakeConnection([BLEConnectionError("link lost")])
        with pytest.raises(BLEConnectionError):
            await classify("IQOS", fake)

    @pytest.mark.asyncio
    async def test_unknown_name_is_checked(self, holder_product_number_response, flexbattery_eco_response):
        fake = _FakeConnection([holder_product_number_response, flexbattery_eco_response])
        result = await classify(None, fake)
        assert result.tier is DeviceTier.ENHANCED_PLUS
