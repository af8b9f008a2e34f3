import pytest

from multinic.errors import AnnotatedError, annotate, annotatef


def test_annotate_nil_error():
    assert annotate(None, "context") is None


def test_annotate_normal_case():
    err = annotate(Exception("existing error"), "context")
    assert str(err) == "context: existing error"


def test_annotate_keeps_cause():
    original = ValueError("existing error")
    err = annotate(original, "context")
    assert isinstance(err, AnnotatedError)
    assert err.cause is original
    assert err.__cause__ is original
    assert err.message == "context"


def test_annotatef_nil_error():
    assert annotatef(None, "context") is None


def test_annotatef_without_args():
    err = annotatef(Exception("existing error"), "context")
    assert str(err) == "context: existing error"


def test_annotatef_with_args():
    err = annotatef(Exception("existing error"), "context %s %d", "arg", 100)
    assert str(err) == "context arg 100: existing error"


def test_annotated_error_can_be_raised():
    original = RuntimeError("existing error")
    err = annotatef(original, "context %s", "arg")
    assert err.message == "context arg"
    assert err.cause is original
    with pytest.raises(AnnotatedError) as info:
        raise err
    assert str(info.value) == "context arg: existing error"