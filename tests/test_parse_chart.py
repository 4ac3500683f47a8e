import datetime as dt

import pytest

from gantt_chart.chart_models import Item, Resource
from gantt_chart.layout import MalformedInput
from gantt_chart.parse_chart import load_chart, loads_chart

CHART_JSON5 = """
// Release plan
{
  title: "Release",
  markedDate: "2023-02-01",
  resources: [
    "Eng",
    { title: "Ops", color: "#336699" },
  ],
  items: [
    { title: "Build", startDate: "2023-01-05", duration: 10, resource: 0 },
    { title: "Deploy", duration: 3, resource: 1, open: true }, /* trailing comma ok */
    { title: "Go live" },
  ],
}
"""


def test_json5_document_with_comments():
    spec = loads_chart(CHART_JSON5)

    assert spec.title == "Release"
    assert spec.marked_date == dt.date(2023, 2, 1)
    assert spec.resources == (Resource("Eng"), Resource("Ops", color=0x336699))
    assert spec.items == (
        Item("Build", start_date=dt.date(2023, 1, 5), duration=10, resource_index=0),
        Item("Deploy", duration=3, resource_index=1, open=True),
        Item("Go live"),
    )
    assert spec.items[2].is_milestone


def test_yaml_file_is_loaded_by_suffix(tmp_path):
    path = tmp_path / "chart.yaml"
    path.write_text(
        "title: Release\n"
        "resources: [Eng]\n"
        "items:\n"
        "  - {title: Build, startDate: 2023-01-05, duration: 10, resource: 0}\n",
        encoding="utf-8",
    )

    spec = load_chart(path)

    assert spec.items[0].start_date == dt.date(2023, 1, 5)


def test_json5_file_is_loaded(tmp_path):
    path = tmp_path / "chart.json5"
    path.write_text(CHART_JSON5, encoding="utf-8")

    assert load_chart(str(path)).title == "Release"


def test_item_title_is_optional():
    spec = loads_chart('{title: "P", resources: ["A", "B"], items: [{startDate: "2023-01-01", duration: 1, resource: 5}]}')

    assert spec.items[0].title == ""
    assert spec.items[0].resource_index == 5


@pytest.mark.parametrize(
    "document, message",
    [
        ("[1, 2]", "expected mapping"),
        ('{resources: [], items: []}', "missing required field 'title'"),
        ('{title: "", resources: [], items: []}', "expected non-empty string"),
        ('{title: "P", resources: [], items: [], extra: 1}', "unexpected fields"),
        ('{title: "P", resources: [1], items: []}', "resources[0]"),
        ('{title: "P", resources: [{title: "A", color: "blue"}], items: []}', "resources[0].color"),
        ('{title: "P", resources: [], items: [{startDate: "2023-13-01"}]}', "items[0].startDate"),
        ('{title: "P", resources: [], items: [{duration: -1}]}', "non-negative"),
        ('{title: "P", resources: [], items: [{duration: 1.5}]}', "items[0].duration"),
        ('{title: "P", resources: [], items: [{resource: true}]}', "items[0].resource"),
        ('{title: "P", resources: [], items: [{open: "yes"}]}', "items[0].open"),
        ('{title: "P", resources: [], items: {}}', "expected list"),
    ],
)
def test_structural_errors_are_malformed_input(document, message):
    with pytest.raises(MalformedInput) as excinfo:
        loads_chart(document)

    assert message in str(excinfo.value)


def test_syntax_errors_are_malformed_input():
    with pytest.raises(MalformedInput):
        loads_chart("{title: ")

    with pytest.raises(MalformedInput):
        loads_chart("title: [unclosed", fmt="yaml")


def test_mixed_type_unknown_keys_are_malformed_input():
    document = "title: P\nresources: []\nitems: []\n1: x\nfoo: y\n"

    with pytest.raises(MalformedInput) as excinfo:
        loads_chart(document, fmt="yaml")

    assert "unexpected fields ['1', 'foo']" in str(excinfo.value)


def test_non_utf8_file_is_malformed_input(tmp_path):
    path = tmp_path / "chart.json5"
    path.write_bytes(b'{title: "\xff"}')

    with pytest.raises(MalformedInput, match="UTF-8"):
        load_chart(path)


def test_bytes_are_decoded_as_utf8():
    spec = loads_chart(CHART_JSON5.encode("utf-8"))

    assert spec.title == "Release"
