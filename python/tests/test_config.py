import pytest

from mocapbvh.config import Channel, ParserConfig


@pytest.mark.parametrize("token", ["Xposition", "xposition", "XPOSITION", "xPoSiTiOn"])
def test_channel_lookup_ignores_case(token):
    assert Channel.lookup(token) is Channel.XPOSITION


def test_channel_lookup_is_exact():
    assert Channel.lookup("Xpos") is None
    assert Channel.lookup("Xpositions") is None


def test_channel_properties():
    assert Channel.ZROTATION.axis == "Z"
    assert Channel.ZROTATION.is_rotation
    assert not Channel.ZROTATION.is_position
    assert Channel.YPOSITION.is_position


def test_presets():
    strict = ParserConfig.strict()
    assert strict.require_header and not strict.ignore_trailing_data
    lenient = ParserConfig.lenient()
    assert lenient.allow_unterminated_hierarchy and not lenient.strict_channels


def test_end_site_name_template():
    assert ParserConfig().format_end_site_name("Head") == "Head_End"
    assert ParserConfig(end_site_name="Site").format_end_site_name("Head") == "Site"
