from __future__ import annotations

from dataclasses import fields

import pytest

from jate.keymaps import ActionRef, Binding, KeymapConflictError, KeymapRegistry
from jate.keymaps.defaults import DEFAULT_BINDINGS, load_default_keymaps
from jate.terminal import KeyEvent, KeyKind


def make_action(action_id: str = "core.test") -> ActionRef:
    return ActionRef(id=action_id, handler=lambda *args, **kwargs: None)


def make_binding(
    *,
    binding_id: str,
    mode: str = "editing",
    key: str = "ctrl+x",
    action_id: str = "core.test",
) -> Binding:
    return Binding(id=binding_id, mode=mode, key=key, action_id=action_id)


def test_models_carry_only_dispatch_fields() -> None:
    action = make_action("core.sample")
    binding = Binding.for_key(
        "editing.ctrl_x",
        mode="editing",
        key=KeyEvent.ctrl("x"),
        action_id="core.sample",
    )

    assert action.telemetry_name == "core.sample"
    assert [item.name for item in fields(ActionRef)] == [
        "id",
        "handler",
        "telemetry_name",
        "description",
    ]
    assert [item.name for item in fields(Binding)] == [
        "id",
        "mode",
        "key",
        "action_id",
        "description",
    ]
    assert binding.key == KeyEvent.ctrl("x").token
    assert not hasattr(KeymapRegistry, "get_binding")


def test_register_binding_success() -> None:
    registry = KeymapRegistry()
    registry.register_action(make_action())
    binding = make_binding(binding_id="editing.ctrl_x")

    registry.register_binding(binding)

    assert registry.stats().binding_count == 1
    assert list(registry.iter_bindings(mode="editing")) == [binding]
    assert registry.binding_for("editing", "ctrl+x") == binding


def test_register_binding_conflict_detection() -> None:
    registry = KeymapRegistry()
    registry.register_action(make_action())
    registry.register_binding(make_binding(binding_id="editing.ctrl_x"))

    with pytest.raises(KeymapConflictError):
        registry.register_binding(make_binding(binding_id="editing.ctrl_x.duplicate"))


def test_same_key_in_other_mode_is_not_a_conflict() -> None:
    registry = KeymapRegistry()
    registry.register_action(make_action())

    registry.register_binding(make_binding(binding_id="editing.x"))
    registry.register_binding(make_binding(binding_id="prompt.x", mode="prompt"))

    assert registry.stats().binding_count == 2
    assert registry.stats().modes == ("editing", "prompt")


def test_register_binding_with_replace() -> None:
    registry = KeymapRegistry()
    registry.register_action(make_action())
    first = make_binding(binding_id="binding")
    second = make_binding(binding_id="other")

    registry.register_binding(first)
    registry.register_binding(second, replace=True)

    assert list(registry.iter_bindings()) == [second]
    assert registry.binding_for("editing", "ctrl+x") == second


def test_register_binding_requires_action() -> None:
    registry = KeymapRegistry()

    with pytest.raises(KeyError):
        registry.register_binding(make_binding(binding_id="orphan"))


def test_unregister_binding() -> None:
    registry = KeymapRegistry()
    registry.register_action(make_action())
    binding = make_binding(binding_id="binding")
    registry.register_binding(binding)
    before = registry.revision()

    removed = registry.unregister_binding("binding")

    assert removed == binding
    assert registry.stats().binding_count == 0
    assert registry.binding_for("editing", "ctrl+x") is None
    assert registry.revision() == before + 1
    assert registry.unregister_binding("binding") is None


def test_binding_for_key_uses_token() -> None:
    binding = Binding.for_key(
        "editing.page_up",
        mode="editing",
        key=KeyEvent.of(KeyKind.PAGE_UP),
        action_id="motion.page_up",
    )

    assert binding.key == "PAGE_UP"


def test_binding_validation() -> None:
    with pytest.raises(ValueError):
        Binding(id="", mode="editing", key="x", action_id="a")
    with pytest.raises(ValueError):
        Binding(id="b", mode="editing", key="", action_id="a")


def test_load_default_keymaps_registers_everything() -> None:
    registry = KeymapRegistry()

    load_default_keymaps(registry)

    assert registry.stats().binding_count == len(DEFAULT_BINDINGS)
    assert registry.binding_for("editing", "ctrl+q").action_id == "file.quit"
    assert registry.binding_for("editing", "ctrl+s").action_id == "file.save"
    assert registry.binding_for("prompt", "ESC").action_id == "prompt.cancel"
    assert registry.binding_for("prompt", "ENTER").action_id == "prompt.submit"


def test_load_default_keymaps_exclude_and_extra() -> None:
    registry = KeymapRegistry()
    registry.register_action(make_action("core.custom"))
    extra = Binding(
        id="editing.custom", mode="editing", key="ctrl+l", action_id="core.custom"
    )

    load_default_keymaps(
        registry,
        exclude_bindings=("editing.page_down",),
        extra_bindings=(extra,),
    )

    assert registry.binding_for("editing", "PAGE_DOWN") is None
    assert registry.binding_for("editing", "ctrl+l") == extra
    assert registry.binding_for("editing", "ctrl+l").action_id == "core.custom"
