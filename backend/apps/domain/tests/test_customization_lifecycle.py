# apps/domain/tests/test_customization_lifecycle.py
"""
Tests for the customization lifecycle state machine
"""
import threading

import pytest

from apps.adapters.repositories.inmemory_repos import (
    InMemoryCustomizationRepository,
    InMemoryPromptCatalog,
)
from apps.domain.models import (
    MAX_OWNER_ID_LENGTH,
    UNSET,
    BasePrompt,
    EditOutcome,
    NotAvailableError,
    NotFoundError,
    ValidationError,
)
from apps.domain.services.customization_service import CustomizationLifecycleManager
from apps.domain.services.prompt_resolver import OverrideResolver
from apps.infrastructure.resolution_cache import InMemoryResolutionCache


def _prompt(prompt_id, content="Base content"):
    return BasePrompt(
        id=prompt_id,
        description=f"Prompt {prompt_id}",
        content=content,
        model="gpt-4o-mini",
        temperature=1.0,
    )


class TestSubmitEdit:
    """Test submit_edit transitions"""

    def setup_method(self):
        self.catalog = InMemoryPromptCatalog([
            BasePrompt(
                id="p1",
                description="Summarize text",
                content="Summarize: {text}",
                model="gpt-4",
                temperature=0.7,
            ),
            _prompt("p2"),
        ])
        self.repo = InMemoryCustomizationRepository()
        self.manager = CustomizationLifecycleManager(
            catalog=self.catalog,
            customization_repo=self.repo,
            allowed_models=["gpt-4o-mini", "gpt-4o", "gpt-4"],
        )
        self.resolver = OverrideResolver(self.catalog, self.repo)

    def _instruction(self, prompt_id, owner_id):
        resolved = {p.id: p for p in self.resolver.resolve(owner_id)}
        return resolved[prompt_id].effective_instruction

    def test_whitespace_edit_without_customization_is_noop(self):
        """Blank edit on an absent record reports deleted and stores nothing"""
        outcome = self.manager.submit_edit("p1", "u1", "  ")

        assert outcome == EditOutcome.DELETED
        assert self.repo.get("p1", "u1") is None
        assert self.repo.count() == 0

    def test_none_text_is_treated_as_empty(self):
        """Missing text behaves like an empty edit"""
        assert self.manager.submit_edit("p1", "u1", None) == EditOutcome.DELETED
        assert self.repo.count() == 0

    def test_first_non_empty_edit_creates(self):
        """First non-empty edit creates the customization"""
        outcome = self.manager.submit_edit("p1", "u1", "Do X")

        assert outcome == EditOutcome.CREATED
        assert self._instruction("p1", "u1") == "Do X"

    def test_second_edit_updates_in_place(self):
        """Subsequent edit updates without adding a record"""
        self.manager.submit_edit("p1", "u1", "Do X")
        outcome = self.manager.submit_edit("p1", "u1", "Do Y")

        assert outcome == EditOutcome.UPDATED
        assert self.repo.count(prompt_id="p1", owner_id="u1") == 1
        assert self._instruction("p1", "u1") == "Do Y"

    def test_empty_edit_deletes_existing(self):
        """Empty edit after a record exists deletes it"""
        self.manager.submit_edit("p1", "u1", "Do X")
        outcome = self.manager.submit_edit("p1", "u1", "")

        assert outcome == EditOutcome.DELETED
        assert self.repo.get("p1", "u1") is None
        assert self._instruction("p1", "u1") is UNSET

    def test_text_is_trimmed_before_storing(self):
        """Leading and trailing whitespace is stripped"""
        self.manager.submit_edit("p1", "u1", "\n  Be concise \t")

        assert self.repo.get("p1", "u1").content == "Be concise"

    def test_edits_are_scoped_to_owner(self):
        """One owner's edit doesn't affect another owner"""
        self.manager.submit_edit("p1", "u1", "Mine")

        assert self._instruction("p1", "u2") is UNSET
        assert self.manager.submit_edit("p1", "u2", "Theirs") == EditOutcome.CREATED
        assert self._instruction("p1", "u1") == "Mine"

    def test_unknown_prompt_raises_not_found(self):
        """Edits against prompts outside the catalog are rejected"""
        with pytest.raises(NotFoundError) as exc_info:
            self.manager.submit_edit("missing", "u1", "Do X")

        assert exc_info.value.prompt_id == "missing"
        assert exc_info.value.owner_id == "u1"
        assert exc_info.value.operation == "submit_edit"

    def test_blank_owner_raises_validation_error(self):
        """Owner identity is required"""
        with pytest.raises(ValidationError):
            self.manager.submit_edit("p1", "  ", "Do X")

    def test_overlong_owner_raises_validation_error(self):
        """Owner ids longer than the stored column are rejected up front"""
        with pytest.raises(ValidationError):
            self.manager.submit_edit("p1", "u" * (MAX_OWNER_ID_LENGTH + 1), "Do X")

        assert self.repo.count() == 0

    def test_owner_at_length_limit_accepted(self):
        owner_id = "u" * MAX_OWNER_ID_LENGTH

        assert self.manager.submit_edit("p1", owner_id, "Do X") == EditOutcome.CREATED

    def test_scenario_create_then_clear(self):
        """End-to-end: unset -> created -> deleted -> unset"""
        assert self._instruction("p1", "u1") is UNSET

        assert self.manager.submit_edit("p1", "u1", "Be concise") == EditOutcome.CREATED
        assert self._instruction("p1", "u1") == "Be concise"

        assert self.manager.submit_edit("p1", "u1", "") == EditOutcome.DELETED
        assert self._instruction("p1", "u1") is UNSET


class TestOverrides:
    """Test optional model and temperature overrides"""

    def setup_method(self):
        self.catalog = InMemoryPromptCatalog([_prompt("p1")])
        self.repo = InMemoryCustomizationRepository()
        self.manager = CustomizationLifecycleManager(
            catalog=self.catalog,
            customization_repo=self.repo,
            allowed_models=["gpt-4o-mini", "gpt-4o", "gpt-4"],
            temperature_range=(0.0, 2.0),
        )

    def test_overrides_are_stored(self):
        """Model and temperature overrides are persisted with content"""
        self.manager.submit_edit("p1", "u1", "Do X", model="gpt-4o", temperature=0.2)

        stored = self.repo.get("p1", "u1")
        assert stored.model == "gpt-4o"
        assert stored.temperature == 0.2

    def test_disallowed_model_rejected(self):
        """Models outside the allowed list raise ValidationError"""
        with pytest.raises(ValidationError):
            self.manager.submit_edit("p1", "u1", "Do X", model="unknown-model")

        assert self.repo.count() == 0

    @pytest.mark.parametrize("model", [4, ["gpt-4o"]])
    def test_non_string_model_rejected(self, model):
        with pytest.raises(ValidationError):
            self.manager.submit_edit("p1", "u1", "Do X", model=model)

        assert self.repo.count() == 0

    @pytest.mark.parametrize("temperature", [-0.1, 2.1, "hot"])
    def test_invalid_temperature_rejected(self, temperature):
        """Temperatures outside the range or non-numeric are rejected"""
        with pytest.raises(ValidationError):
            self.manager.submit_edit("p1", "u1", "Do X", temperature=temperature)

    @pytest.mark.parametrize("temperature", [0.0, 2.0])
    def test_temperature_bounds_inclusive(self, temperature):
        """Range endpoints are accepted"""
        self.manager.submit_edit("p1", "u1", "Do X", temperature=temperature)

        assert self.repo.get("p1", "u1").temperature == temperature

    def test_blank_model_means_inherit(self):
        """Blank model override is stored as None"""
        self.manager.submit_edit("p1", "u1", "Do X", model="  ")

        assert self.repo.get("p1", "u1").model is None

    def test_overrides_ignored_on_delete_path(self):
        """Invalid overrides don't block an empty-text delete"""
        self.manager.submit_edit("p1", "u1", "Do X")

        outcome = self.manager.submit_edit("p1", "u1", "", model="bogus", temperature=99)

        assert outcome == EditOutcome.DELETED
        assert self.repo.count() == 0

    def test_any_model_allowed_without_list(self):
        """No allowed list means any model name is accepted"""
        manager = CustomizationLifecycleManager(self.catalog, self.repo)

        manager.submit_edit("p1", "u1", "Do X", model="custom-model")

        assert self.repo.get("p1", "u1").model == "custom-model"


class TestDeleteCustomization:
    """Test explicit delete"""

    def setup_method(self):
        self.catalog = InMemoryPromptCatalog([_prompt("p1")])
        self.repo = InMemoryCustomizationRepository()
        self.manager = CustomizationLifecycleManager(self.catalog, self.repo)

    def test_delete_existing(self):
        """Explicit delete removes the record"""
        self.manager.submit_edit("p1", "u1", "Do X")

        assert self.manager.delete_customization("p1", "u1") == EditOutcome.DELETED
        assert self.repo.get("p1", "u1") is None

    def test_delete_absent_raises_not_found(self):
        """Explicit delete of an absent record raises NotFoundError"""
        with pytest.raises(NotFoundError) as exc_info:
            self.manager.delete_customization("p1", "u1")

        assert exc_info.value.operation == "remove"

    def test_delete_twice_is_safe(self):
        """Second delete raises NotFoundError instead of crashing"""
        self.manager.submit_edit("p1", "u1", "Do X")
        self.manager.delete_customization("p1", "u1")

        with pytest.raises(NotFoundError):
            self.manager.delete_customization("p1", "u1")
        with pytest.raises(NotFoundError):
            self.manager.delete_customization("p1", "u1")

    def test_delete_leaves_other_owners(self):
        """Deleting one owner's customization keeps others"""
        self.manager.submit_edit("p1", "u1", "Mine")
        self.manager.submit_edit("p1", "u2", "Theirs")

        self.manager.delete_customization("p1", "u1")

        assert self.repo.get("p1", "u2").content == "Theirs"


class TestStoreFailures:
    """Test backing store failures are surfaced"""

    def setup_method(self):
        self.catalog = InMemoryPromptCatalog([_prompt("p1")])
        self.repo = InMemoryCustomizationRepository()
        self.manager = CustomizationLifecycleManager(self.catalog, self.repo)

    def test_store_unavailable_propagates(self):
        """NotAvailableError reaches the caller with context"""
        self.repo.available = False

        with pytest.raises(NotAvailableError) as exc_info:
            self.manager.submit_edit("p1", "u1", "Do X")

        assert exc_info.value.prompt_id == "p1"
        assert exc_info.value.owner_id == "u1"

    def test_catalog_unavailable_propagates(self):
        """Catalog failures are not swallowed"""
        self.catalog.available = False

        with pytest.raises(NotAvailableError):
            self.manager.submit_edit("p1", "u1", "Do X")


class TestCacheInvalidation:
    """Test the resolution cache is dropped on every mutation"""

    def setup_method(self):
        self.catalog = InMemoryPromptCatalog([_prompt("p1")])
        self.repo = InMemoryCustomizationRepository()
        self.cache = InMemoryResolutionCache()
        self.manager = CustomizationLifecycleManager(
            self.catalog, self.repo, cache=self.cache
        )
        self.resolver = OverrideResolver(self.catalog, self.repo, cache=self.cache)

    def test_create_update_delete_invalidate(self):
        """Resolver never serves a stale view after an edit"""
        assert self.resolver.resolve("u1")[0].effective_instruction is UNSET

        self.manager.submit_edit("p1", "u1", "Do X")
        assert self.resolver.resolve("u1")[0].effective_instruction == "Do X"

        self.manager.submit_edit("p1", "u1", "Do Y")
        assert self.resolver.resolve("u1")[0].effective_instruction == "Do Y"

        self.manager.delete_customization("p1", "u1")
        assert self.resolver.resolve("u1")[0].effective_instruction is UNSET

    def test_other_owner_cache_kept(self):
        """Edits by one owner don't evict another owner's entry"""
        self.resolver.resolve("u2")
        self.manager.submit_edit("p1", "u1", "Do X")

        assert self.cache.get("u2") is not None


class TestConcurrency:
    """Test per-key serialization"""

    def setup_method(self):
        self.catalog = InMemoryPromptCatalog([_prompt(f"p{i}") for i in range(5)])
        self.repo = InMemoryCustomizationRepository()
        self.manager = CustomizationLifecycleManager(self.catalog, self.repo)

    def test_distinct_keys_do_not_interfere(self):
        """Concurrent edits on distinct pairs all create their own record"""
        outcomes = {}
        errors = []

        def edit(prompt_id, owner_id):
            try:
                outcomes[(prompt_id, owner_id)] = self.manager.submit_edit(
                    prompt_id, owner_id, f"{prompt_id}-{owner_id}"
                )
            except Exception as e:  # surfaced via the errors list
                errors.append(e)

        threads = [
            threading.Thread(target=edit, args=(f"p{i}", f"u{j}"))
            for i in range(5)
            for j in range(4)
        ]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert errors == []
        assert len(outcomes) == 20
        assert all(o == EditOutcome.CREATED for o in outcomes.values())
        for (prompt_id, owner_id) in outcomes:
            assert self.repo.get(prompt_id, owner_id).content == f"{prompt_id}-{owner_id}"

    def test_same_key_creates_exactly_once(self):
        """Concurrent edits on one pair produce one create, rest updates"""
        outcomes = []
        lock = threading.Lock()

        def edit(n):
            outcome = self.manager.submit_edit("p0", "u1", f"version {n}")
            with lock:
                outcomes.append(outcome)

        threads = [threading.Thread(target=edit, args=(n,)) for n in range(10)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert outcomes.count(EditOutcome.CREATED) == 1
        assert outcomes.count(EditOutcome.UPDATED) == 9
        assert self.repo.count(prompt_id="p0", owner_id="u1") == 1
