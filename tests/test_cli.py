"""Tests for the bugtracker command line entry point."""

import pytest
from unittest.mock import AsyncMock, patch

import yaml

from bugtracker import cli
from bugtracker.workitem.types import HttpResponse


MESSAGE = b"""\
From: jane@example.org
To: webapp@bugs.example.com
Subject: Login button does nothing

Click login, nothing happens.
"""


@pytest.fixture
def eml(tmp_path):
    path = tmp_path / "bug.eml"
    path.write_bytes(MESSAGE)
    return path


@pytest.fixture
def config_file(tmp_path):
    path = tmp_path / "bugtracker.yaml"
    path.write_text(yaml.dump({
        "azure_devops": {"organization": "org", "project": "fallback", "personal_access_token": "pat"}
    }))
    return path


def test_resolve_prints_project(eml, config_file, capsys):
    code = cli.main(["resolve", str(eml), "--config", str(config_file)])

    assert code == 0
    assert capsys.readouterr().out.strip() == "resolved:recipient:webapp:Login button does nothing"


def test_submit_posts_work_item(eml, config_file, capsys):
    post = AsyncMock(return_value=HttpResponse(status=200, body="{}"))
    with patch("bugtracker.workitem.transport.AiohttpTransport.post", post):
        code = cli.main(["submit", str(eml), "--config", str(config_file)])

    assert code == 0
    assert capsys.readouterr().out.strip().endswith("created:webapp:Login button does nothing")
    uri = post.await_args.args[0]
    assert uri == "https://dev.azure.com/org/webapp/_apis/wit/workitems/$Bug?api-version=5.0"


def test_submit_failure_exit_code(eml, config_file, capsys):
    post = AsyncMock(return_value=HttpResponse(status=401, body="unauthorized"))
    with patch("bugtracker.workitem.transport.AiohttpTransport.post", post):
        code = cli.main(["submit", str(eml), "--config", str(config_file)])

    assert code == 1
    assert capsys.readouterr().err.startswith("error:")


def test_invalid_config_exit_code(eml, tmp_path, capsys):
    bad = tmp_path / "bad.yaml"
    bad.write_text(yaml.dump({"azure_devops": {"organization": ""}}))

    code = cli.main(["resolve", str(eml), "--config", str(bad)])

    assert code == 2
    assert capsys.readouterr().err.startswith("invalid:")


def test_non_scalar_config_value_exit_code(eml, tmp_path, capsys):
    bad = tmp_path / "bad.yaml"
    bad.write_text(yaml.dump({"azure_devops": {"organization": "org", "project": {"name": "x"}}}))

    code = cli.main(["resolve", str(eml), "--config", str(bad)])

    assert code == 2
    assert capsys.readouterr().err.startswith("invalid:")
