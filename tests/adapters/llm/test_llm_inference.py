from __future__ import annotations

import logging

import pytest

from kubesync.adapters.llm import infer_capabilities, infer_capability
from kubesync.adapters.llm.prompts import SYSTEM_PROMPT, build_human_message
from kubesync.adapters.llm.schema import CapabilityAnalysis
from kubesync.domain.errors import InferenceError
from kubesync.domain.model import CapabilityCandidate, Complexity
from tests.support.fakes import FakeModel, ProgressRecorder

SQL = CapabilityCandidate(
    name="sqls.devopstoolkit.live",
    api_version="devopstoolkit.live/v1beta1",
    group="devopstoolkit.live",
    kind="SQL",
    namespaced=True,
    is_crd=True,
    schema="KIND: SQL\nFIELDS:\n  spec <Object>\n    size <string>",
)
CONFIGMAP = CapabilityCandidate(
    name="configmaps",
    api_version="v1",
    group="",
    kind="ConfigMap",
    namespaced=True,
    is_crd=False,
    schema="KIND: ConfigMap",
)

SQL_PAYLOAD: dict[str, object] = {
    "capabilities": ["database"],
    "providers": ["aws", "gcp"],
    "complexity": "low",
    "description": "Provisions a managed SQL database.",
    "useCase": "Deploy a database for an application.",
    "confidence": 0.9,
}


def test_record_identity_always_comes_from_the_candidate() -> None:
    payload = {
        **SQL_PAYLOAD,
        "resourceName": "hijacked",
        "apiVersion": "evil/v1",
        "group": "evil",
        "kind": "Evil",
    }
    model = FakeModel({SQL.name: payload})

    record = infer_capability(SQL, model=model)

    assert record.resource_name == "sqls.devopstoolkit.live"
    assert record.api_version == SQL.api_version
    assert record.group == SQL.group
    assert record.kind == SQL.kind
    assert record.capabilities == ("database",)
    assert record.providers == ("aws", "gcp")
    assert record.complexity is Complexity.LOW
    assert record.confidence == 0.9


def test_model_receives_system_and_human_messages() -> None:
    model = FakeModel({SQL.name: SQL_PAYLOAD})

    infer_capability(SQL, model=model)

    assert model.calls == [[("system", SYSTEM_PROMPT), ("human", build_human_message(SQL))]]
    human = model.calls[0][1][1]
    assert human.splitlines()[:5] == [
        "Resource: sqls.devopstoolkit.live",
        "Kind: SQL",
        "API Version: devopstoolkit.live/v1beta1",
        "",
        "Schema (kubectl explain --recursive):",
    ]
    assert SQL.schema in human


def test_pydantic_payloads_are_accepted() -> None:
    model = FakeModel({SQL.name: CapabilityAnalysis.model_validate(SQL_PAYLOAD)})

    record = infer_capability(SQL, model=model)

    assert record.use_case == "Deploy a database for an application."


def test_invocation_failure_raises_inference_error() -> None:
    model = FakeModel({SQL.name: RuntimeError("rate limited")})

    with pytest.raises(InferenceError) as excinfo:
        infer_capability(SQL, model=model)

    assert excinfo.value.resource_name == SQL.name
    assert "rate limited" in str(excinfo.value)


@pytest.mark.parametrize(
    "payload",
    [
        {**SQL_PAYLOAD, "confidence": 1.5},
        {**SQL_PAYLOAD, "complexity": "extreme"},
        {key: value for key, value in SQL_PAYLOAD.items() if key != "description"},
        "not an object",
    ],
)
def test_invalid_payload_raises_inference_error(payload: object) -> None:
    model = FakeModel({SQL.name: payload})

    with pytest.raises(InferenceError):
        infer_capability(SQL, model=model)


def test_infer_capabilities_drops_failures_and_keeps_going(
    caplog: pytest.LogCaptureFixture,
) -> None:
    model = FakeModel({CONFIGMAP.name: RuntimeError("boom"), SQL.name: SQL_PAYLOAD})
    progress = ProgressRecorder()

    with caplog.at_level(logging.WARNING):
        records = infer_capabilities([CONFIGMAP, SQL], model=model, progress=progress)

    assert [record.resource_name for record in records] == [SQL.name]
    assert len(model.calls) == 2
    assert "skipping configmaps" in caplog.text
    assert progress.messages == [
        "Inferring capabilities (1 of 2): configmaps",
        "Inferring capabilities (2 of 2): sqls.devopstoolkit.live",
        "Inference complete: 1 of 2 resources processed.",
    ]


def test_infer_capabilities_with_no_candidates() -> None:
    progress = ProgressRecorder()

    records = infer_capabilities([], model=FakeModel(), progress=progress)

    assert records == []
    assert progress.messages == ["Inference complete: 0 of 0 resources processed."]
