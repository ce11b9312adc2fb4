"""Tests for infrastructure.i18n.resolver module."""

import pytest

from infrastructure.i18n import CaptionResolver
from infrastructure.i18n.resolver import interpolate
from tests.factories.i18n import make_session, make_store


@pytest.fixture
def spanish_resolver(default_document):
    """Resolver over a store with only {common: {save: "Guardar"}} loaded for "es"."""
    store = make_store(session=make_session({"es": {"common": {"save": "Guardar"}}}))
    return CaptionResolver(store, default_document=default_document)


@pytest.mark.unit
class TestResolveFallbackChain:
    """Tests for the ordered fallback chain."""

    @pytest.mark.asyncio
    async def test_store_hit(self, spanish_resolver):
        await spanish_resolver.store.activate("es")

        assert spanish_resolver.resolve("common.save") == "Guardar"
        assert spanish_resolver.stats().store_hits == 1

    @pytest.mark.asyncio
    async def test_default_document_fallback(self, spanish_resolver):
        await spanish_resolver.store.activate("es")

        assert spanish_resolver.resolve("common.cancel") == "Cancel"
        assert spanish_resolver.stats().fallback_hits == 1

    @pytest.mark.asyncio
    async def test_missing_key_returns_key(self, spanish_resolver):
        await spanish_resolver.store.activate("es")

        assert spanish_resolver.resolve("unknown.key") == "unknown.key"
        assert spanish_resolver.stats().missing_keys == 1

    @pytest.mark.asyncio
    async def test_missing_key_returns_explicit_fallback(self, spanish_resolver):
        await spanish_resolver.store.activate("es")

        assert spanish_resolver.resolve("unknown.key", "N/A") == "N/A"
        assert spanish_resolver.stats().missing_keys == 1

    def test_empty_string_fallback_is_used(self, resolver):
        """An explicit empty fallback is still a fallback."""
        assert resolver.resolve("unknown.key", "") == ""

    def test_default_locale_resolves_from_bundle(self, resolver):
        """With the default locale active everything is a fallback hit."""
        assert resolver.resolve("common.save") == "Save"
        stats = resolver.stats()
        assert stats.store_hits == 0
        assert stats.fallback_hits == 1

    def test_section_key_is_not_a_caption(self, resolver):
        """A key naming a whole section does not resolve to the mapping."""
        assert resolver.resolve("common") == "common"
        assert resolver.stats().missing_keys == 1

    @pytest.mark.asyncio
    async def test_empty_translation_falls_through(self, default_document):
        store = make_store(session=make_session({"es": {"common": {"save": ""}}}))
        resolver = CaptionResolver(store, default_document=default_document)
        await store.activate("es")

        assert resolver.resolve("common.save") == "Save"
        assert resolver.stats().fallback_hits == 1

    @pytest.mark.asyncio
    async def test_unloaded_section_falls_back(self, store, default_document):
        """Sections not loaded for the active locale come from the bundle."""
        resolver = CaptionResolver(store, default_document=default_document)
        await store.activate("es")

        assert resolver.resolve("dashboard.welcome", params={"name": "Ava"}) == "Welcome back, Ava!"
        await resolver.load_section("dashboard")
        assert resolver.resolve("dashboard.welcome", params={"name": "Ava"}) == (
            "Bienvenido de nuevo, Ava!"
        )

    def test_internal_error_returns_fallback(self, resolver, monkeypatch):
        def _broken(document, path):
            raise RuntimeError("broken")

        monkeypatch.setattr("infrastructure.i18n.resolver.get_nested_value", _broken)
        assert resolver.resolve("common.save", "Save") == "Save"
        assert resolver.resolve("common.save") == "common.save"


@pytest.mark.unit
class TestInterpolation:
    """Tests for placeholder substitution."""

    def test_substitutes_param(self, resolver):
        assert resolver.resolve("dashboard.welcome", params={"name": "Ava"}) == "Welcome back, Ava!"

    def test_without_params_keeps_placeholder(self, resolver):
        assert resolver.resolve("dashboard.welcome") == "Welcome back, {name}!"

    def test_replaces_every_occurrence(self):
        assert interpolate("{n} and {n}", {"n": 2}) == "2 and 2"

    def test_unmatched_placeholder_left_verbatim(self):
        assert interpolate("Hi {name}, {unknown}", {"name": "Ava"}) == "Hi Ava, {unknown}"

    def test_literal_braces_pass_through(self):
        assert interpolate("Use {{ and }} or {", {"name": "x"}) == "Use {{ and }} or {"

    def test_non_string_values_are_stringified(self):
        assert interpolate("{count} items", {"count": 3}) == "3 items"

    def test_params_apply_to_fallback_text(self, resolver):
        assert resolver.resolve("missing.key", "Hello {name}", {"name": "Ava"}) == "Hello Ava"


@pytest.mark.unit
class TestResolverAuxiliary:
    """Tests for exists, resolve_many and statistics."""

    @pytest.mark.asyncio
    async def test_exists_only_checks_loaded_content(self, resolver):
        await resolver.store.activate("es")

        assert resolver.exists("common.save") is True
        assert resolver.exists("common.cancel") is False
        assert resolver.exists("dashboard.welcome") is False

    @pytest.mark.asyncio
    async def test_exists_is_false_for_section_keys(self, resolver):
        await resolver.store.activate("es")

        assert resolver.is_section_loaded("common") is True
        assert resolver.exists("common") is False

    @pytest.mark.asyncio
    async def test_exists_does_not_touch_stats(self, resolver):
        await resolver.store.activate("es")
        resolver.exists("common.save")
        assert resolver.stats().total == 0

    @pytest.mark.asyncio
    async def test_resolve_many(self, resolver):
        await resolver.store.activate("es")

        result = resolver.resolve_many(["common.save", "common.cancel", "nope"])

        assert result == {
            "common.save": "Guardar",
            "common.cancel": "Cancel",
            "nope": "nope",
        }
        stats = resolver.stats()
        assert (stats.store_hits, stats.fallback_hits, stats.missing_keys) == (1, 1, 1)

    @pytest.mark.asyncio
    async def test_resolution_is_idempotent(self, resolver):
        await resolver.store.activate("es")
        params = {"name": "Ava"}

        first = resolver.resolve("common.save", params=params)
        second = resolver.resolve("common.save", params=params)

        assert first == second
        assert resolver.stats().store_hits == 2
        assert resolver.stats().total == 2

    def test_stats_is_a_snapshot(self, resolver):
        snapshot = resolver.stats()
        resolver.resolve("common.save")
        assert snapshot.fallback_hits == 0
        assert resolver.stats().fallback_hits == 1

    def test_new_resolver_resets_stats(self, resolver, default_document):
        resolver.resolve("common.save")
        fresh = CaptionResolver(resolver.store, default_document=default_document)
        assert fresh.stats().total == 0

    def test_log_stats_summary(self, resolver):
        resolver.resolve("common.save")
        resolver.resolve("nope")

        summary = resolver.log_stats()

        assert summary["total"] == 2
        assert summary["percentages"]["fallback_hits"] == 50.0
        assert summary["current_locale"] == "en"

    @pytest.mark.asyncio
    async def test_state_passthrough(self, resolver):
        assert resolver.current_locale == "en"
        assert resolver.is_loading is False
        await resolver.store.activate("es")
        assert resolver.current_locale == "es"
        assert resolver.is_section_loaded("common") is True
        assert resolver.is_section_loaded("dashboard") is False

    @pytest.mark.asyncio
    async def test_load_section_never_raises(self, resolver, monkeypatch):
        async def _boom(section):
            raise RuntimeError("boom")

        monkeypatch.setattr(resolver.store, "load_section", _boom)
        await resolver.load_section("dashboard")

    def test_uses_bundled_document_by_default(self, store):
        resolver = CaptionResolver(store)
        assert resolver.resolve("common.save") == "Save"
