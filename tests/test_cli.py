# tests/test_cli.py

import pytest

from oauth_gateway import cli


def test_create_client_arguments():
    args = cli.build_parser().parse_args([
        "create-client", "--name", "Partner", "--request-limit", "10",
        "--redirect", "https://a.example/cb", "--redirect", "https://b.example/cb",
    ])

    assert args.command == "create-client"
    assert args.name == "Partner"
    assert args.request_limit == 10
    assert args.redirect_uris == ["https://a.example/cb", "https://b.example/cb"]


def test_command_is_required():
    with pytest.raises(SystemExit):
        cli.build_parser().parse_args([])


def test_main_prints_credentials(monkeypatch, capsys):
    async def fake_create_client(name, request_limit, redirect_uris):
        return {"client_id": "cid", "client_secret": "csecret"}

    monkeypatch.setattr(cli, "create_client", fake_create_client)

    assert cli.main(["create-client", "--name", "Partner"]) == 0
    assert capsys.readouterr().out.splitlines() == ["client_id=cid", "client_secret=csecret"]
