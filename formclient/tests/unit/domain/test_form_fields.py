from __future__ import annotations

import pytest

from formclient.domain.context import FormContext
from formclient.domain.errors import FormErrors
from formclient.domain.form import Form


def test_get_data_returns_constructor_fields() -> None:
    form = Form({"name": "Ada", "email": "ada@example.com", "age": 36})

    assert form.get_data() == {"name": "Ada", "email": "ada@example.com", "age": 36}


def test_merge_data_overrides_initial_values() -> None:
    form = Form({"name": "Ada", "role": "user"}, {"role": "admin", "team": "core"})

    assert form.get_data() == {"name": "Ada", "role": "admin", "team": "core"}


def test_reserved_keys_are_excluded_and_reinitialised() -> None:
    form = Form({"name": "Ada", "busy": True, "successful": True, "errors": {"x": 1}})

    assert form.get_data() == {"name": "Ada"}
    assert form.busy is False
    assert form.successful is False
    assert isinstance(form.errors, FormErrors)
    assert not form.errors.any()


def test_nested_forms_attribute_is_not_a_field() -> None:
    form = Form({"title": "Order"})
    form.forms = [Form({"sku": "A-1"})]

    assert form.get_data() == {"title": "Order"}
    assert form.forms[0].sku == "A-1"


def test_get_data_is_a_fresh_copy() -> None:
    form = Form({"name": "Ada"})

    data = form.get_data()
    data["name"] = "Grace"
    data["extra"] = True

    assert form.name == "Ada"
    assert "extra" not in form


def test_set_overwrites_and_adds_fields() -> None:
    form = Form({"name": "Ada", "email": ""})

    form.set({"email": "ada@example.com", "newsletter": True})

    assert form.get_data() == {
        "name": "Ada",
        "email": "ada@example.com",
        "newsletter": True,
    }


def test_attribute_and_item_assignment_reach_the_same_fields() -> None:
    form = Form()
    form.name = "Ada"
    form["post"] = "Engineer"

    assert form["name"] == "Ada"
    assert form.get_data() == {"name": "Ada", "post": "Engineer"}
    # Method names stay callable; the field is reachable by item access.
    assert callable(form.post)
    assert form.keys() == ["name", "post"]


def test_unknown_field_raises_attribute_error() -> None:
    form = Form({"name": "Ada"})

    with pytest.raises(AttributeError):
        _ = form.missing


def test_deleting_a_field_removes_it_from_data() -> None:
    form = Form({"name": "Ada", "tmp": 1})

    del form.tmp

    assert form.get_data() == {"name": "Ada"}


def test_reset_blanks_fields_and_keeps_flags() -> None:
    form = Form({"name": "Ada", "age": 36, "agree": True})
    form.busy = True
    form.successful = True
    form.errors.set({"name": ["taken"]})

    form.reset()

    assert form.get_data() == {"name": "", "age": "", "agree": ""}
    assert form.busy is True
    assert form.successful is True
    assert form.errors.get("name") == "taken"


def test_clear_resets_errors_and_success_only() -> None:
    form = Form({"name": "Ada"})
    form.busy = True
    form.successful = True
    form.errors.set({"name": ["taken"]})

    form.clear()

    assert not form.errors.any()
    assert form.successful is False
    assert form.busy is True
    assert form.name == "Ada"


def test_start_processing_from_any_state() -> None:
    form = Form({"name": "Ada"})
    form.successful = True
    form.errors.set({"name": ["taken"]})

    form.start_processing()

    assert form.busy is True
    assert form.successful is False
    assert not form.errors.any()


def test_finish_processing_marks_success() -> None:
    form = Form()
    form.start_processing()

    form.finish_processing()

    assert form.busy is False
    assert form.successful is True


def test_custom_reserved_names_are_honoured() -> None:
    ctx = FormContext(ignore=("busy", "successful", "errors", "forms", "meta"))
    form = Form({"name": "Ada", "meta": {"source": "signup"}}, context=ctx)

    assert form.get_data() == {"name": "Ada"}
    assert form.meta == {"source": "signup"}


def test_context_requires_core_reserved_names() -> None:
    with pytest.raises(ValueError):
        FormContext(ignore=("busy",))


def test_underscore_fields_are_regular_fields() -> None:
    form = Form({"_token": "abc", "_method": "PUT", "name": "Ada"})

    assert form.get_data() == {"_token": "abc", "_method": "PUT", "name": "Ada"}
    assert form._token == "abc"
    assert form["_method"] == "PUT"

    form.reset()

    assert form.get_data() == {"_token": "", "_method": "", "name": ""}


def test_field_named_like_an_internal_does_not_clobber_the_form() -> None:
    form = Form({"_fields": "x", "_context": "y", "name": "Ada"})

    assert form.get_data() == {"_fields": "x", "_context": "y", "name": "Ada"}
    assert form["_fields"] == "x"
    assert isinstance(form.context, FormContext)
