import pytest

from ffengine.config import DEFAULT_FORMAT, FORMATS, ScoringFormat, get_format, get_format_by_key, iter_formats


def test_get_format_is_case_insensitive():
    fmt = get_format("HALF", 6)
    assert fmt.scoring == "half"
    assert fmt.td_pts == 6
    assert fmt.key == "HALF_6"
    assert fmt.reception_weight == 0.5


def test_get_format_by_key_string_alias():
    fmt = get_format_by_key("STD_4")
    assert fmt.reception_weight == 0.0
    assert fmt.label == "Standard, 4pt passing TD"


def test_get_format_by_key_tuple():
    assert get_format_by_key(("ppr", 4)) is DEFAULT_FORMAT


def test_get_format_missing_raises():
    with pytest.raises(KeyError):
        get_format("ppr", 5)
    with pytest.raises(KeyError):
        get_format("superflex", 4)
    with pytest.raises(KeyError):
        get_format("ppr", "six")


def test_get_format_by_key_validates_input():
    with pytest.raises(ValueError):
        get_format_by_key("PPR")
    with pytest.raises(TypeError):
        get_format_by_key(4)  # type: ignore[arg-type]


def test_registry_lists_six_formats():
    keys = {fmt.key for fmt in iter_formats()}
    assert keys == {"PPR_4", "PPR_6", "HALF_4", "HALF_6", "STD_4", "STD_6"}
    assert set(FORMATS) == keys
    assert DEFAULT_FORMAT.key == "PPR_4"


def test_scoring_format_normalizes_case():
    fmt = ScoringFormat("PPR", 4)
    assert fmt.scoring == "ppr"
    assert fmt.reception_weight == 1.0
    assert fmt == DEFAULT_FORMAT


@pytest.mark.parametrize("scoring, td_pts", [("superflex", 4), ("ppr", 5), ("half", 0)])
def test_scoring_format_rejects_unknown_settings(scoring, td_pts):
    with pytest.raises(ValueError):
        ScoringFormat(scoring, td_pts)
