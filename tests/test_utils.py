import pytest

from school_portal.services.grades import average, round_half_up, score_distribution
from school_portal.utils.ids import is_valid_object_id, new_object_id, normalize_object_id
from school_portal.utils.subjects import (
    canonical_subject,
    clean_subject_list,
    normalize_subject,
    teaches_subject,
)


def test_new_object_id_is_valid():
    value = new_object_id()
    assert len(value) == 24
    assert is_valid_object_id(value)
    assert new_object_id() != value


@pytest.mark.parametrize("value", ["", "abc", "z" * 24, "a" * 25, None, 123])
def test_invalid_object_ids(value):
    assert not is_valid_object_id(value)


def test_normalize_object_id():
    assert normalize_object_id("ABCDEF0123456789ABCDEF01") == "abcdef0123456789abcdef01"


def test_subject_matching():
    assert normalize_subject("  Math ") == "math"
    assert teaches_subject(["Math", "Music"], " music")
    assert teaches_subject(["STRASSE"], "straße")
    assert not teaches_subject(["Math"], "Science")
    assert not teaches_subject([], "Math")


def test_clean_subject_list():
    assert clean_subject_list([" Math", "math", "", "  ", "Art"]) == ["Math", "Art"]


def test_rounding_and_distribution():
    assert round_half_up(89.5) == 90
    assert round_half_up(81.33) == 81
    assert average([]) == 0
    assert average([70, 71]) == 71

    dist = score_distribution([100, 90, 89, 80, 79, 70, 69, 0])
    assert (dist.excellent, dist.good, dist.average, dist.needs_help) == (2, 2, 2, 2)


def test_health(client):
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "ok"


def test_canonical_subject():
    assert canonical_subject(["Math", "Art"], "  mATH ") == "Math"
    assert canonical_subject(["Math"], "  Science ") == "Science"
    assert canonical_subject([], "Music") == "Music"
