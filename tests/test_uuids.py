"""Unit tests for hlaunch.uuids."""

import uuid

from hlaunch.uuids import format_uuid, normalize_uuid, offline_uuid, uuids_match

CANONICAL = "069a79f4-44e9-4726-a5be-fca90e38aaf5"
COMPACT = "069a79f444e94726a5befca90e38aaf5"


class TestNormalizeUuid:
    def test_strips_hyphens(self):
        assert normalize_uuid(CANONICAL) == COMPACT

    def test_lower_cases(self):
        assert normalize_uuid(CANONICAL.upper()) == COMPACT

    def test_ignores_hyphen_placement(self):
        assert normalize_uuid("069a-79f444e94726a5befca90e38-aaf5") == COMPACT

    def test_none_stays_none(self):
        assert normalize_uuid(None) is None

    def test_wrong_length_is_invalid(self):
        assert normalize_uuid(COMPACT[:-1]) is None
        assert normalize_uuid(COMPACT + "0") is None

    def test_non_hex_is_invalid(self):
        assert normalize_uuid("g" + COMPACT[1:]) is None

    def test_player_name_is_invalid(self):
        assert normalize_uuid("Notch") is None


class TestFormatUuid:
    def test_formats_compact_as_8_4_4_4_12(self):
        assert format_uuid(COMPACT) == CANONICAL

    def test_round_trips_canonical_ids(self):
        for _ in range(20):
            value = str(uuid.uuid4())
            assert format_uuid(normalize_uuid(value)) == value

    def test_invalid_value_is_returned_unchanged(self):
        assert format_uuid("not-a-uuid") == "not-a-uuid"


class TestUuidsMatch:
    def test_matches_across_case_and_hyphens(self):
        assert uuids_match(CANONICAL.upper(), COMPACT) is True

    def test_different_ids_do_not_match(self):
        assert uuids_match(CANONICAL, str(uuid.uuid4())) is False

    def test_invalid_ids_never_match(self):
        assert uuids_match("Notch", "Notch") is False
        assert uuids_match(None, None) is False


class TestOfflineUuid:
    def test_is_a_version_3_uuid(self):
        value = uuid.UUID(offline_uuid("Steve"))
        assert value.version == 3
        assert value.variant == uuid.RFC_4122

    def test_is_stable_per_name(self):
        assert offline_uuid("Steve") == offline_uuid("Steve")
        assert offline_uuid("Steve") != offline_uuid("Alex")
