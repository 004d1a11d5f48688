"""
End-to-end parse tests: scenarios, error propagation and result invariants
"""
import pytest
from pydantic import ValidationError

from models.crm_response import EmptyRecordSet, IdList, NormalizedResult, OutcomeSet
from models.response_errors import ApiError, MalformedDocumentError, UnrecognizedShapeError
from normalize.transformer import looks_successful, parse, parse_response


def test_get_record_by_id_scenario():
    """getRecordById exposes the lead id."""
    xml = (
        '<response uri="X"><result><Leads><row no="1">'
        '<FL val="LEADID">123456789012345678</FL></row></Leads></result></response>'
    )
    result = parse(xml, "Leads", "getRecordById")
    assert result.primary_record_id == "123456789012345678"
    assert result.resource_uri == "X"
    assert result.records.kind == "rows"


def test_deletion_scenario():
    """Both deleted ids are joined with a semicolon."""
    xml = (
        "<response><result><message>Record(s) 1234567890123456;2345678901234567 deleted</message>"
        "<code>0</code></result></response>"
    )
    result = parse(xml, "Leads", "deleteRecords")
    assert result.primary_record_id == "1234567890123456;2345678901234567"
    assert result.status_code == "0"


def test_updated_ids_scenario():
    """Two updated ids give an id list and no primary id."""
    xml = (
        '<response><result><updated-ids>["111","222"]</updated-ids>'
        "<status><code>200</code></status></result></response>"
    )
    result = parse(xml, "Leads", "updateRelatedRecords")
    assert isinstance(result.records, IdList)
    assert [entry.record_id for entry in result.records.ids] == ["111", "222"]
    assert result.primary_record_id is None


@pytest.mark.parametrize("text", ["", "garbage", "<<>>"])
def test_garbage_is_malformed(text):
    """Non-XML input fails before classification."""
    with pytest.raises(MalformedDocumentError):
        parse(text, "Leads", "getRecords")


@pytest.mark.parametrize("method", ["getRecords", "getFields", "getUsers", "deleteRecords"])
def test_api_error_regardless_of_content(method):
    """A top-level error short-circuits whatever else the document holds."""
    xml = (
        '<response uri="/crm/private/xml/Leads/getRecords">'
        "<result><Leads><row no='1'><FL val='LEADID'>1</FL></row></Leads>"
        "<message>m</message><code>0</code></result>"
        "<error><code>4834</code><message>Invalid Ticket Id</message></error></response>"
    )
    with pytest.raises(ApiError) as exc_info:
        parse(xml, "Leads", method)
    assert exc_info.value.code == "4834"
    assert exc_info.value.message == "Invalid Ticket Id"
    assert exc_info.value.uri == "/crm/private/xml/Leads/getRecords"


@pytest.mark.parametrize("method", ["getRecords", "getFields", "getUsers", "anything"])
def test_no_data_regardless_of_method(nodata_xml, method):
    """nodata always yields empty records and its status text."""
    result = parse(nodata_xml, "Leads", method)
    assert result.records == EmptyRecordSet()
    assert len(result.records) == 0
    assert result.status_message == "There is no data to show"
    assert result.status_code == "4422"


def test_unrecognized_shape_is_raised():
    """Unknown documents are never turned into empty results."""
    with pytest.raises(UnrecognizedShapeError):
        parse("<response><result><something/></result></response>", "Leads", "getRecords")


def test_context_is_echoed(records_xml):
    """Module, method and the raw document come back untouched."""
    result = parse_response(records_xml, "Leads", "getRecords")
    assert result.module_name == "Leads"
    assert result.operation_name == "getRecords"
    assert result.raw_document == records_xml
    assert result.related_records is result.records


def test_missing_uri_is_empty_string():
    """A well-formed document without uri still reports a string."""
    result = parse("<success><Contact>1</Contact></success>", "Leads", "convertLead")
    assert result.resource_uri == ""


def test_bulk_order_independent_of_input(post_bulk_xml):
    """Outcome keys ascend numerically whatever order rows arrive in."""
    result = parse(post_bulk_xml, "Leads", "insertRecords")
    assert isinstance(result.records, OutcomeSet)
    keys = [int(key) for key in result.records.outcomes]
    assert keys == sorted(keys)
    assert keys == [1, 2, 10]


@pytest.mark.parametrize(
    "fixture_name, module, method",
    [
        ("fields_xml", "Leads", "getFields"),
        ("users_xml", "Users", "getUsers"),
        ("records_xml", "Leads", "getRecords"),
        ("post_legacy_xml", "Leads", "insertRecords"),
        ("post_bulk_xml", "Leads", "insertRecords"),
        ("related_xml", "Leads", "updateRelatedRecords"),
        ("convert_xml", "Leads", "convertLead"),
        ("delete_xml", "Leads", "deleteRecords"),
        ("nodata_xml", "Leads", "getRecords"),
    ],
)
def test_parse_is_idempotent(request, fixture_name, module, method):
    """Parsing the same input twice gives identical results."""
    xml = request.getfixturevalue(fixture_name)
    first = parse(xml, module, method)
    second = parse(xml, module, method)
    assert first == second
    assert first.model_dump() == second.model_dump()


def test_result_is_frozen(records_xml):
    """Results cannot be modified after construction."""
    result = parse(records_xml, "Leads", "getRecords")
    with pytest.raises(ValidationError):
        result.primary_record_id = "1"


@pytest.mark.parametrize(
    "message, expected",
    [
        ("Record(s) added successfully", True),
        ("success", True),
        ("Record(s) added Successfully", False),
        ("There is no data to show", False),
        (None, False),
    ],
)
def test_looks_successful(message, expected):
    """Substring check, case-sensitive."""
    result = NormalizedResult(module_name="Leads", operation_name="x", raw_document="", status_message=message)
    assert looks_successful(result) is expected
    assert result.looks_successful() is expected


def test_legacy_post_success(post_legacy_xml):
    """Legacy inserts report their single id and look successful."""
    result = parse(post_legacy_xml, "Leads", "insertRecords")
    assert result.primary_record_id == "2000000018001"
    assert looks_successful(result)
