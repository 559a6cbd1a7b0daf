"""Tests for Azure DevOps request formatting and response parsing."""

import json

import pytest

from bugtracker.workitem.azure_devops import (
    create_work_item_body,
    create_work_item_uri,
    parse_created_work_item,
)


def test_uri_for_org_and_project():
    assert create_work_item_uri("org", "proj") == (
        "https://dev.azure.com/org/proj/_apis/wit/workitems/$Bug?api-version=5.0"
    )


def test_body_keeps_non_ascii_text():
    assert '"value":"Überweisung schlägt fehl"' in create_work_item_body("Überweisung schlägt fehl", "")


class TestParseCreatedWorkItem:

    def test_id_and_url(self):
        body = json.dumps({"id": 42, "_links": {"html": {"href": "https://dev.azure.com/o/p/_workitems/edit/42"}}})
        assert parse_created_work_item(body) == {
            "id": "42",
            "url": "https://dev.azure.com/o/p/_workitems/edit/42",
        }

    @pytest.mark.parametrize(
        "links",
        [None, [], "x", {"html": None}, {"html": ["x"]}, {"html": {}}],
    )
    def test_malformed_links_give_id_only(self, links):
        assert parse_created_work_item(json.dumps({"id": 1, "_links": links})) == {"id": "1"}

    @pytest.mark.parametrize("body", ["ok", "", "[1, 2]", '{"value": []}', "null"])
    def test_not_a_work_item(self, body):
        assert parse_created_work_item(body) == {}
