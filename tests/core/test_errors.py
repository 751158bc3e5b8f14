# tests/core/test_errors.py
"""
Testes do padrão canônico de erros (ImgfxErrorPayload).

Os testes asseguram que:
- cada exceção do domínio mapeia para um código estável
- exceções externas viram EXECUTOR_ERROR sem stack trace
- exceções do domínio continuam compatíveis com as builtin equivalentes
- StepFailed descreve o passo que falhou
"""

import json

import pytest

try:
    from imgfx_pipeline.core.errors import (
        EXECUTOR_ERROR,
        ImgfxErrorPayload,
        exception_to_payload,
        step_failed,
    )
    from imgfx_pipeline.core.exceptions import (
        ImgfxException,
        InapplicableField,
        IndexOutOfBounds,
        InvalidChannelSpec,
        InvalidImageBuffer,
        MissingRequiredField,
        OperationNotRegistered,
        OutOfRange,
        RunInProgress,
        StepFailed,
        UnknownEffectKind,
    )
except Exception as e:  # noqa: BLE001
    exception_to_payload = None
    _IMPORT_ERR = e
else:
    _IMPORT_ERR = None


def _require_imports():
    if _IMPORT_ERR is not None:
        pytest.fail(
            "Missing error modules. Implement:\n"
            "- src/imgfx_pipeline/core/exceptions.py\n"
            "- src/imgfx_pipeline/core/errors.py (exception_to_payload)\n"
            f"Import error: {_IMPORT_ERR}"
        )


@pytest.mark.parametrize(
    "cls_name,code,builtin",
    [
        ("InvalidChannelSpec", "INVALID_CHANNEL_SPEC", ValueError),
        ("MissingRequiredField", "MISSING_REQUIRED_FIELD", TypeError),
        ("OutOfRange", "OUT_OF_RANGE", ValueError),
        ("InapplicableField", "INAPPLICABLE_FIELD", TypeError),
        ("UnknownEffectKind", "UNKNOWN_EFFECT_KIND", LookupError),
        ("IndexOutOfBounds", "INDEX_OUT_OF_BOUNDS", IndexError),
        ("InvalidImageBuffer", "INVALID_IMAGE_BUFFER", ValueError),
        ("OperationNotRegistered", "OPERATION_NOT_REGISTERED", LookupError),
        ("RunInProgress", "RUN_IN_PROGRESS", RuntimeError),
        ("StepFailed", "STEP_FAILED", RuntimeError),
    ],
)
def test_codes_and_builtin_compat(cls_name, code, builtin):
    _require_imports()
    cls = globals()[cls_name]
    exc = cls(message="falhou", details={"k": 1}, hint="corrija")

    assert isinstance(exc, ImgfxException)
    assert isinstance(exc, builtin)
    payload = exception_to_payload(exc)
    assert payload.type == code
    assert payload.message == "falhou"
    assert payload.details == {"k": 1}
    assert payload.hint == "corrija"


def test_foreign_exception_payload():
    _require_imports()
    payload = exception_to_payload(ZeroDivisionError("division by zero"))
    assert payload.type == EXECUTOR_ERROR
    assert payload.message == "division by zero"
    assert payload.details == {"exception_class": "ZeroDivisionError"}
    assert "Traceback" not in json.dumps(payload.to_dict())


def test_payload_is_serializable():
    _require_imports()
    payload = ImgfxErrorPayload(type="OUT_OF_RANGE", message="m", details={"a": [1, 2]})
    assert json.loads(json.dumps(payload.to_dict())) == {
        "type": "OUT_OF_RANGE",
        "message": "m",
        "details": {"a": [1, 2]},
        "hint": None,
    }


def test_step_failed_factory():
    _require_imports()
    cause = OperationNotRegistered(message="Nenhuma operação registrada para: sort")
    error = step_failed(step=3, total=4, kind="sort", name="Sort", cause=cause)

    assert isinstance(error, StepFailed)
    assert error.step == 3 and error.total == 4
    assert error.remaining == 2
    assert error.detail == "Nenhuma operação registrada para: sort"
    assert str(error) == "Error applying effect 3 of 4 (Sort): Nenhuma operação registrada para: sort"
    assert error.details["cause"]["type"] == "OPERATION_NOT_REGISTERED"


def test_exceptions_are_raisable():
    _require_imports()
    with pytest.raises(OutOfRange) as exc:
        raise OutOfRange(message="bits fora do intervalo", details={"field": "bits"})
    assert str(exc.value) == "bits fora do intervalo"
    assert exc.value.details == {"field": "bits"}
