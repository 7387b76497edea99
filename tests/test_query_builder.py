"""Tests for search parameter building."""

import pytest

from mediafetch.exceptions import InvalidMediaType, InvalidParameter, MissingParameter
from mediafetch.models import MediaType
from mediafetch.search.query import (
    MAX_PAGE_SIZE,
    build_param_sets,
    build_search_request,
    next_start,
    page_size,
    parse_media_type,
)


def test_parse_media_type_accepts_known_values():
    assert parse_media_type("images") is MediaType.IMAGES
    assert parse_media_type("videos") is MediaType.VIDEOS
    assert parse_media_type("both") is MediaType.BOTH


@pytest.mark.parametrize("value", ["image", "audio", "", None, 3])
def test_parse_media_type_rejects_unknown_values(value):
    with pytest.raises(InvalidMediaType) as exc_info:
        parse_media_type(value)
    assert exc_info.value.status_code == 400
    assert exc_info.value.message == "Invalid searchType"


def test_build_search_request_defaults_start():
    request = build_search_request("  cats  ", "images", 5)
    assert request.query == "cats"
    assert request.media_type is MediaType.IMAGES
    assert request.desired_count == 5
    assert request.start == 1


def test_build_search_request_checks_media_type_first():
    with pytest.raises(InvalidMediaType):
        build_search_request(None, "gifs", None)


@pytest.mark.parametrize("query", [None, "", "   "])
def test_build_search_request_requires_query(query):
    with pytest.raises(MissingParameter) as exc_info:
        build_search_request(query, "images", 5)
    assert exc_info.value.name == "query"


def test_build_search_request_requires_count():
    with pytest.raises(MissingParameter):
        build_search_request("cats", "images", None)


@pytest.mark.parametrize("count", [0, -3])
def test_build_search_request_rejects_non_positive_count(count):
    with pytest.raises(InvalidParameter):
        build_search_request("cats", "images", count)


def test_build_search_request_rejects_zero_start():
    with pytest.raises(InvalidParameter):
        build_search_request("cats", "images", 5, start=0)


def test_image_params_exclude_video_hosts(settings):
    request = build_search_request("cats", "images", 5)
    (param_set,) = build_param_sets(request, settings)

    assert param_set.kind == "images"
    assert param_set.params["key"] == "test-key"
    assert param_set.params["cx"] == "test-cx"
    assert param_set.params["searchType"] == "image"
    assert param_set.params["q"] == "cats -site:youtube.com -site:i.ytimg.com"


def test_video_params_carry_video_filters(settings):
    request = build_search_request("cats", "videos", 5)
    (param_set,) = build_param_sets(request, settings)

    assert param_set.kind == "videos"
    assert param_set.params["q"] == "cats"
    assert param_set.params["fileType"] == "mp4,avi,mov,wmv"
    assert param_set.params["hq"] == "videos"
    assert param_set.params["type"] == "video"
    assert "searchType" not in param_set.params


def test_both_builds_image_then_video_sets(settings):
    request = build_search_request("cats", "both", 5)
    kinds = [param_set.kind for param_set in build_param_sets(request, settings)]
    assert kinds == ["images", "videos"]


def test_page_caps_size_at_provider_maximum(settings):
    request = build_search_request("cats", "images", 25)
    (param_set,) = build_param_sets(request, settings)

    page = param_set.page(start=11, remaining=25)
    assert page["num"] == str(MAX_PAGE_SIZE)
    assert page["start"] == "11"

    assert param_set.page(start=21, remaining=5)["num"] == "5"


def test_page_size_bounds():
    assert page_size(1) == 1
    assert page_size(10) == 10
    assert page_size(250) == 10


def test_next_start_stops_at_result_window():
    assert next_start(1, 10) == 11
    assert next_start(81, 10) == 91
    assert next_start(91, 10) is None


def test_page_stays_inside_result_window(settings):
    request = build_search_request("cats", "images", 10, start=95)
    (param_set,) = build_param_sets(request, settings)

    assert param_set.page(start=95, remaining=10)["num"] == "6"
    assert param_set.page(start=100, remaining=10)["num"] == "1"


def test_page_size_is_zero_past_result_window():
    assert page_size(10, start=101) == 0
    assert page_size(10, start=250) == 0
