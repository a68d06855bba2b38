"""Tests for routemap.validation — config checks and metadata normalization."""

from datetime import date, datetime, timedelta, timezone

import pytest

from routemap._errors import ConfigurationError, ValidationError
from routemap.config import Entry, EntryMeta, RouteDefinition, SitemapConfig
from routemap.validation import (
    check_changefreq,
    check_priority,
    normalize_lastmod,
    normalize_meta,
    validate_config,
    validate_slugs,
)


# ---------------------------------------------------------------------------
# Metadata values
# ---------------------------------------------------------------------------


class TestChangefreq:
    """check_changefreq — enumerated domain."""

    @pytest.mark.parametrize(
        "value", ["always", "hourly", "daily", "weekly", "monthly", "yearly", "never"],
    )
    def test_valid(self, value: str) -> None:
        check_changefreq(value, "test")

    @pytest.mark.parametrize("value", ["sometimes", "Daily", "", 3, ["weekly"], {"weekly": 1}])
    def test_invalid(self, value: object) -> None:
        with pytest.raises(ValidationError, match="changefreq"):
            check_changefreq(value, "test")


class TestPriority:
    """check_priority — number in [0.0, 1.0]."""

    @pytest.mark.parametrize("value", [0, 0.0, 0.5, 1, 1.0])
    def test_valid(self, value: float) -> None:
        assert check_priority(value, "test") == float(value)

    @pytest.mark.parametrize("value", [-0.1, 1.01, 2])
    def test_out_of_range(self, value: float) -> None:
        with pytest.raises(ValidationError, match="outside"):
            check_priority(value, "test")

    @pytest.mark.parametrize("value", ["0.5", True, None])
    def test_not_a_number(self, value: object) -> None:
        with pytest.raises(ValidationError, match="number"):
            check_priority(value, "test")


class TestLastmod:
    """normalize_lastmod — dates, timestamps and free-form strings."""

    def test_plain_date_string_kept(self) -> None:
        assert normalize_lastmod("2020-01-01", "t") == "2020-01-01"

    def test_date_value(self) -> None:
        assert normalize_lastmod(date(2018, 6, 24), "t") == "2018-06-24"

    def test_free_form_string(self) -> None:
        assert normalize_lastmod("December 17, 1995 03:24:00", "t") == "1995-12-17T03:24:00.000Z"

    def test_naive_datetime_read_as_utc(self) -> None:
        assert normalize_lastmod(datetime(1995, 12, 17, 3, 24), "t") == "1995-12-17T03:24:00.000Z"

    def test_aware_datetime_converted(self) -> None:
        moment = datetime(2020, 1, 1, 10, 0, tzinfo=timezone(timedelta(hours=2)))
        assert normalize_lastmod(moment, "t") == "2020-01-01T08:00:00.000Z"

    def test_epoch_milliseconds(self) -> None:
        assert normalize_lastmod(1578485826000, "t") == "2020-01-08T12:17:06.000Z"

    def test_milliseconds_kept(self) -> None:
        assert normalize_lastmod(1578485826123, "t") == "2020-01-08T12:17:06.123Z"

    def test_iso_string_with_offset(self) -> None:
        assert normalize_lastmod("2020-01-01T10:00:00+02:00", "t") == "2020-01-01T08:00:00.000Z"

    def test_iso_string_with_z(self) -> None:
        assert normalize_lastmod("2020-01-08T12:17:06Z", "t") == "2020-01-08T12:17:06.000Z"

    def test_rfc_2822(self) -> None:
        assert normalize_lastmod("Wed, 08 Jan 2020 12:17:06 +0000", "t") == "2020-01-08T12:17:06.000Z"

    def test_invalid_calendar_date(self) -> None:
        with pytest.raises(ValidationError, match="not a valid date"):
            normalize_lastmod("2020-02-30", "t")

    def test_unparseable(self) -> None:
        with pytest.raises(ValidationError, match="cannot parse"):
            normalize_lastmod("last tuesday", "t")

    @pytest.mark.parametrize("value", [True, [2020, 1, 1], {"y": 2020}])
    def test_wrong_type(self, value: object) -> None:
        with pytest.raises(ValidationError):
            normalize_lastmod(value, "t")

    def test_error_names_location(self) -> None:
        with pytest.raises(ValidationError, match="route '/about'"):
            normalize_lastmod("soon", "route '/about'")


class TestNormalizeMeta:
    """normalize_meta — validates and normalizes every set field."""

    def test_empty(self) -> None:
        assert normalize_meta(EntryMeta(), "t") == EntryMeta()

    def test_normalizes(self) -> None:
        meta = normalize_meta(EntryMeta(lastmod=0, changefreq="daily", priority=1), "t")
        assert meta == EntryMeta(lastmod="1970-01-01T00:00:00.000Z", changefreq="daily", priority=1.0)


# ---------------------------------------------------------------------------
# Slugs
# ---------------------------------------------------------------------------


class TestValidateSlugs:
    """validate_slugs — rules for literal and produced slug lists."""

    def test_scalars_for_single_param(self) -> None:
        validate_slugs(RouteDefinition("/user/:id"), [1, 2, "three"])

    def test_mapping_for_single_param(self) -> None:
        validate_slugs(RouteDefinition("/user/:id"), [{"id": 1, "priority": 0.5}])

    def test_mappings_for_multi_param(self) -> None:
        route = RouteDefinition("/article/:category/:title")
        validate_slugs(route, [{"category": "blog", "title": "a"}])

    def test_not_a_list(self) -> None:
        with pytest.raises(ValidationError, match="must be a list"):
            validate_slugs(RouteDefinition("/user/:id"), 5)

    def test_none_element(self) -> None:
        with pytest.raises(ValidationError, match="None"):
            validate_slugs(RouteDefinition("/user/:id"), [None])

    def test_missing_param_named(self) -> None:
        route = RouteDefinition("/article/:category/:title")
        with pytest.raises(ValidationError, match="'title'"):
            validate_slugs(route, [{"category": "blog"}])

    def test_wrong_param(self) -> None:
        with pytest.raises(ValidationError, match="'id'"):
            validate_slugs(RouteDefinition("/user/:id"), [{"title": 5}])

    def test_extraneous_param(self) -> None:
        with pytest.raises(ValidationError, match="unknown parameter"):
            validate_slugs(RouteDefinition("/user/:id"), [{"id": 5, "title": "x"}])

    def test_scalar_for_multi_param(self) -> None:
        route = RouteDefinition("/article/:category/:title")
        with pytest.raises(ValidationError, match="must be a mapping"):
            validate_slugs(route, ["blog"])

    def test_invalid_slug_metadata(self) -> None:
        with pytest.raises(ValidationError, match="changefreq"):
            validate_slugs(RouteDefinition("/user/:id"), [{"id": 1, "changefreq": "often"}])

    def test_error_names_route(self) -> None:
        with pytest.raises(ValidationError, match="/user/:id"):
            validate_slugs(RouteDefinition("/user/:id"), [None])


# ---------------------------------------------------------------------------
# Configuration
# ---------------------------------------------------------------------------


class TestValidateConfig:
    """validate_config — fail fast before any resolution."""

    def test_empty_config(self) -> None:
        validate_config(SitemapConfig())

    def test_absolute_urls_need_no_origin(self) -> None:
        validate_config(SitemapConfig(urls=("https://example.com/a",)))

    def test_partial_url_needs_origin(self) -> None:
        with pytest.raises(ConfigurationError, match="'/about'"):
            validate_config(SitemapConfig(urls=("/about",)))

    def test_route_needs_origin(self) -> None:
        with pytest.raises(ConfigurationError, match="base_url"):
            validate_config(SitemapConfig(routes=(RouteDefinition("/about"),)))

    def test_excluded_route_needs_no_origin(self) -> None:
        validate_config(SitemapConfig(routes=(RouteDefinition("*"),)))

    def test_invalid_defaults(self) -> None:
        with pytest.raises(ValidationError, match="defaults"):
            validate_config(SitemapConfig(defaults=EntryMeta(priority=3)))

    def test_invalid_route_meta(self) -> None:
        route = RouteDefinition("/about", meta=EntryMeta(changefreq="sometimes"))
        with pytest.raises(ValidationError, match="/about"):
            validate_config(SitemapConfig(base_url="https://a.net", routes=(route,)))

    def test_invalid_url_meta(self) -> None:
        url = Entry(loc="https://a.net/x", lastmod="not a date")
        with pytest.raises(ValidationError, match="https://a.net/x"):
            validate_config(SitemapConfig(urls=(url,)))

    def test_dynamic_route_without_slugs(self) -> None:
        route = RouteDefinition("/user/:id")
        with pytest.raises(ValidationError, match="missing slugs"):
            validate_config(SitemapConfig(base_url="https://a.net", routes=(route,)))

    def test_both_slug_inputs_rejected(self) -> None:
        route = RouteDefinition("/user/:id", slugs=[1], slug_source=lambda: [2])
        with pytest.raises(ValidationError, match="mutually exclusive"):
            validate_config(SitemapConfig(base_url="https://a.net", routes=(route,)))

    def test_loc_override_on_dynamic_route(self) -> None:
        route = RouteDefinition("/user/:id", loc="/users", slugs=[1])
        with pytest.raises(ValidationError, match="loc"):
            validate_config(SitemapConfig(base_url="https://a.net", routes=(route,)))

    def test_literal_slugs_checked_early(self) -> None:
        route = RouteDefinition("/article/:title/:id", slugs=[{"id": 5}])
        with pytest.raises(ValidationError, match="'title'"):
            validate_config(SitemapConfig(base_url="https://a.net", routes=(route,)))

    def test_slug_source_not_called(self) -> None:
        calls: list[int] = []

        def source() -> list[int]:
            calls.append(1)
            return [1]

        route = RouteDefinition("/user/:id", slug_source=source)
        validate_config(SitemapConfig(base_url="https://a.net", routes=(route,)))
        assert calls == []

    def test_bad_url_type(self) -> None:
        with pytest.raises(ValidationError, match="strings or Entry"):
            validate_config(SitemapConfig(urls=(42,)))  # type: ignore[arg-type]

    def test_unhashable_changefreq_in_url(self) -> None:
        url = Entry(loc="https://a.net/x", changefreq=["weekly"])  # type: ignore[arg-type]
        with pytest.raises(ValidationError, match="changefreq"):
            validate_config(SitemapConfig(urls=(url,)))

    def test_unhashable_changefreq_in_defaults(self) -> None:
        config = SitemapConfig(
            urls=("https://a.net/x",),
            defaults=EntryMeta(changefreq=["weekly"]),  # type: ignore[arg-type]
        )
        with pytest.raises(ValidationError, match="defaults"):
            validate_config(config)

    @pytest.mark.parametrize("loc", [5, ["/about"], ""])
    def test_non_string_loc_override(self, loc: object) -> None:
        route = RouteDefinition("/x", loc=loc)  # type: ignore[arg-type]
        with pytest.raises(ValidationError, match="'loc' must be a non-empty string"):
            validate_config(SitemapConfig(base_url="https://a.net", routes=(route,)))

    def test_non_string_loc_without_origin(self) -> None:
        route = RouteDefinition("https://a.net/x", loc=5)  # type: ignore[arg-type]
        with pytest.raises(ValidationError, match="'loc'"):
            validate_config(SitemapConfig(routes=(route,)))
