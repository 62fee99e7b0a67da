import json

import pytest

from requirement_analyzer.errors import (
    IncompleteResponseError,
    InvalidStructureError,
    MalformedJSONError,
    OutputShapeError,
)
from requirement_analyzer.pipeline import normalizer
from requirement_analyzer.pipeline.normalizer import (
    CLEANUP_STEPS,
    bound_to_braces,
    clean_response,
    ensure_complete,
    parse_analysis,
    remove_trailing_commas,
    strip_code_fences,
    strip_whitespace,
)


# ============================================================
# TEXT TRANSFORMS
# ============================================================

def test_steps_run_in_documented_order():
    assert CLEANUP_STEPS == [
        strip_whitespace,
        ensure_complete,
        strip_code_fences,
        bound_to_braces,
        remove_trailing_commas,
    ]


def test_strip_whitespace():
    assert strip_whitespace('\n\n  {"a": 1}  \n') == '{"a": 1}'


@pytest.mark.parametrize(
    "text",
    [
        '{"a": 1}',
        '```json\n{"a": 1}\n```',
        '{"a": 1}\n```',
    ],
)
def test_ensure_complete_accepts_closing_brace(text):
    assert ensure_complete(text) == text


@pytest.mark.parametrize(
    "text",
    [
        '{"procesos": [{"nombre": "Sales"',
        '{"a": 1} Hope this helps!',
        "",
    ],
)
def test_ensure_complete_rejects_truncated_output(text):
    with pytest.raises(IncompleteResponseError):
        ensure_complete(text)


def test_strip_code_fences_everywhere():
    text = 'Here you go:\n```json\n{"a": 1}\n```\nand again ```json\n```'
    assert "```" not in strip_code_fences(text)
    assert '{"a": 1}' in strip_code_fences(text)


def test_strip_code_fences_leaves_plain_text_alone():
    assert strip_code_fences('{"a": "b"}') == '{"a": "b"}'


def test_bound_to_braces_drops_commentary():
    assert bound_to_braces('Sure! {"a": {"b": 2}} Let me know.') == '{"a": {"b": 2}}'


def test_bound_to_braces_without_object_is_noop():
    assert bound_to_braces("no json here") == "no json here"
    assert bound_to_braces("} backwards {") == "} backwards {"


@pytest.mark.parametrize(
    "text, expected",
    [
        ('[{"a":1},]', '[{"a":1}]'),
        ('{"a": 1,\n}', '{"a": 1}'),
        ('{"a": [1, 2, ]  ,  }', '{"a": [1, 2]  }'),
    ],
)
def test_remove_trailing_commas(text, expected):
    assert remove_trailing_commas(text) == expected


def test_clean_response_applies_every_step():
    raw = '  Result:\n```json\n{"procesos": [{"nombre": "A",},],}\n```  '
    assert json.loads(clean_response(raw)) == {"procesos": [{"nombre": "A"}]}


# ============================================================
# PARSER
# ============================================================

def test_fenced_and_bare_json_parse_identically(analysis_json):
    fenced = f"```json\n{analysis_json}\n```"

    assert parse_analysis(fenced) == parse_analysis(analysis_json)


def test_trailing_commas_still_parse():
    raw = '{"procesos": [{"nombre": "Sales", "subprocesos": [],},],}'

    analysis = parse_analysis(raw)

    assert [p.name for p in analysis.processes] == ["Sales"]


def test_incomplete_response_skips_parsing(monkeypatch):
    def fail(*args, **kwargs):
        raise AssertionError("json.loads must not be called")

    monkeypatch.setattr(normalizer.json, "loads", fail)

    with pytest.raises(IncompleteResponseError) as exc_info:
        parse_analysis('{"procesos": [{"nombre": "Sal')

    assert exc_info.value.status_code == 422
    assert "incomplete" in exc_info.value.details


def test_non_json_is_malformed():
    with pytest.raises(MalformedJSONError):
        parse_analysis("{procesos: nope}")


@pytest.mark.parametrize(
    "raw",
    [
        '{"processes": []}',
        '{"procesos": "none"}',
        '{"procesos": null}',
    ],
)
def test_missing_process_array_is_structural_error(raw):
    with pytest.raises(InvalidStructureError) as exc_info:
        parse_analysis(raw)

    assert "missing processes array" in exc_info.value.details


def test_malformed_items_are_structural_errors():
    with pytest.raises(InvalidStructureError):
        parse_analysis('{"procesos": [{"descripcion": "no name"}]}')


def test_parse_errors_share_the_same_envelope():
    with pytest.raises(OutputShapeError) as exc_info:
        parse_analysis('{"procesos": 1}')

    payload = exc_info.value.to_payload()
    assert payload["success"] is False
    assert payload["error"] == "The AI did not produce valid JSON with the expected structure."
    assert "details" in payload


def test_parsed_tree_counts(analysis_json):
    analysis = parse_analysis(analysis_json)

    assert len(analysis.processes) == 2
    assert analysis.subprocess_count == 4
    assert analysis.use_case_count == 8


def test_lenient_fields():
    raw = json.dumps(
        {
            "procesos": [
                {
                    "nombre": "Billing",
                    "descripcion": None,
                    "subprocesos": [
                        {
                            "nombre": "Invoices",
                            "casos_uso": [
                                {
                                    "nombre": "Issue invoice",
                                    "tipo_caso_uso": "Sistema",
                                    "criterios_de_aceptacion": ["PDF generated", "Email sent"],
                                },
                                {"nombre": "Audit", "tipo_caso_uso": "2"},
                                {"nombre": "Legacy", "tipo_caso_uso": 9},
                            ],
                        }
                    ],
                },
                {"nombre": "Reporting", "subprocesos": None},
            ]
        }
    )

    analysis = parse_analysis(raw)

    billing, reporting = analysis.processes
    assert billing.description == ""
    issue, audit, legacy = billing.subprocesses[0].use_cases
    assert issue.kind == 3
    assert issue.acceptance_criteria == "PDF generated\nEmail sent"
    assert issue.actor == ""
    assert audit.kind == 2
    assert legacy.kind == 9
    assert reporting.subprocesses == []
