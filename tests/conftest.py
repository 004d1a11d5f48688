"""
Sample CRM responses, one per known shape
"""
import pytest


FIELDS_XML = """<?xml version="1.0" encoding="UTF-8" ?>
<Leads>
<section name="Lead Information" dv="Lead Information">
<FL req="false" type="Lookup" isreadonly="false" maxlength="120" label="Lead Owner" dv="Lead Owner" customfield="false"></FL>
<FL req="true" type="Text" isreadonly="false" maxlength="80" label="Company" dv="Company" customfield="false"></FL>
<FL req="false" type="Pick List" isreadonly="true" maxlength="abc" label="Lead Source" dv="Lead Source" customfield="true">
<val>-None-</val>
<val>Advertisement</val>
<val>Cold Call</val>
</FL>
</section>
<section name="Address Information" dv="Address Information">
<FL req="TRUE" type="Text" label="Street" dv="Street"></FL>
</section>
</Leads>
"""

USERS_XML = """<?xml version="1.0" encoding="UTF-8" ?>
<users>
<user id="100000000001" email="ada@example.com" role="CEO" status="active" name="attribute name">Ada Lovelace</user>
<user id="100000000002" email="alan@example.com" role="Manager" status="active">Alan Turing</user>
</users>
"""

RECORDS_XML = """<?xml version="1.0" encoding="UTF-8" ?>
<response uri="/crm/private/xml/Leads/getRecords">
<result>
<Leads>
<row no="1">
<FL val="LEADID">2000000017001</FL>
<FL val="Company"><![CDATA[AT&T]]></FL>
</row>
<row no="3">
<FL val="LEADID">2000000017003</FL>
<FL val="Product Details">
<product no="1"><FL val="Product Id">300001</FL><FL val="Product Name"><![CDATA[Widget]]></FL></product>
<product no="2"><FL val="Product Id">300002</FL><FL val="Product Name"><![CDATA[Gadget]]></FL></product>
</FL>
</row>
</Leads>
</result>
</response>
"""

POST_LEGACY_XML = """<?xml version="1.0" encoding="UTF-8" ?>
<response uri="/crm/private/xml/Leads/insertRecords">
<result>
<message>Record(s) added successfully</message>
<recorddetail>
<FL val="Id">2000000018001</FL>
<FL val="Created Time">2026-10-18 09:00:00</FL>
<FL val="Created By"><![CDATA[admin]]></FL>
</recorddetail>
</result>
</response>
"""

POST_BULK_XML = """<?xml version="1.0" encoding="UTF-8" ?>
<response uri="/crm/private/xml/Leads/insertRecords">
<result>
<row no="10">
<success><code>2000</code><details><FL val="Id">2000000019010</FL></details></success>
</row>
<row no="2">
<error><code>4835</code><details>Mandatory field missing</details></error>
</row>
<row no="1">
<success><code>2001</code><details><FL val="Id">2000000019001</FL><FL val="Modified By">admin</FL></details></success>
</row>
</result>
</response>
"""

RELATED_XML = """<?xml version="1.0" encoding="UTF-8" ?>
<response uri="/crm/private/xml/Leads/updateRelatedRecords">
<result>
<status><code>200</code></status>
<success><code>4800</code></success>
<message>Relation Added Successfully</message>
<added-ids>["2000000020001"]</added-ids>
</result>
</response>
"""

CONVERT_XML = """<?xml version="1.0" encoding="UTF-8" ?>
<success>
<Contact param="id">2000000021001</Contact>
<Account param="id">2000000021002</Account>
<Potential param="id">2000000021003</Potential>
</success>
"""

DELETE_XML = """<?xml version="1.0" encoding="UTF-8" ?>
<response uri="/crm/private/xml/Leads/deleteRecords">
<result>
<code>5000</code>
<message>Record Id(s) : 1234567890123456789,Record(s) deleted successfully</message>
</result>
</response>
"""

NODATA_XML = """<?xml version="1.0" encoding="UTF-8" ?>
<response uri="/crm/private/xml/Leads/getSearchRecords">
<nodata><code>4422</code><message>There is no data to show</message></nodata>
</response>
"""

ERROR_XML = """<?xml version="1.0" encoding="UTF-8" ?>
<response uri="/crm/private/xml/Leads/getRecords">
<error><code>4834</code><message>Invalid Ticket Id</message></error>
</response>
"""


@pytest.fixture
def fields_xml():
    return FIELDS_XML


@pytest.fixture
def users_xml():
    return USERS_XML


@pytest.fixture
def records_xml():
    return RECORDS_XML


@pytest.fixture
def post_legacy_xml():
    return POST_LEGACY_XML


@pytest.fixture
def post_bulk_xml():
    return POST_BULK_XML


@pytest.fixture
def related_xml():
    return RELATED_XML


@pytest.fixture
def convert_xml():
    return CONVERT_XML


@pytest.fixture
def delete_xml():
    return DELETE_XML


@pytest.fixture
def nodata_xml():
    return NODATA_XML


@pytest.fixture
def error_xml():
    return ERROR_XML
