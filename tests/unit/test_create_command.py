from __future__ import annotations

import pytest

from backup_cli.commands.create_command import CreateCommand
from backup_cli.commands.usage import CREATE_USAGE, CommandVariant
from backup_cli.core.errors import TransportError, UsageError
from backup_cli.core.models import BackupType
from tests.conftest import StubBackend, make_options


def test_create_full_backup_of_all_tables(
    backend: StubBackend,
    capsys: pytest.CaptureFixture[str],
) -> None:
    command = CreateCommand(make_options("create", "full", "/backups"), backend.connect)

    assert command.run() == 0

    request = backend.submitted[0]
    assert request.backup_type is BackupType.FULL
    assert request.target_root_dir == "/backups"
    assert request.tables == []
    assert request.backup_set_name is None
    assert request.workers == -1
    assert request.bandwidth == -1
    assert capsys.readouterr().out == (
        "Backup session backup_1771203723000 finished. Status: SUCCESS\n"
    )
    assert backend.all_closed


def test_create_with_table_list_and_tuning_options(backend: StubBackend) -> None:
    options = make_options("create", "INCREMENTAL", "/backups", "t1,ns:t2", w="4", b="100")

    CreateCommand(options, backend.connect).run()

    request = backend.submitted[0]
    assert request.backup_type is BackupType.INCREMENTAL
    assert request.tables == ["t1", "ns:t2"]
    assert request.workers == 4
    assert request.bandwidth == 100


def test_create_with_backup_set_uses_set_name_only(backend: StubBackend) -> None:
    backend.sets["nightly"] = ["t1", "t2"]

    CreateCommand(make_options("create", "full", "/backups", set="nightly"), backend.connect).run()

    request = backend.submitted[0]
    assert request.backup_set_name == "nightly"
    assert request.tables == []


@pytest.mark.parametrize(
    "args",
    [
        ("create", "full"),
        ("create",),
        ("create", "full", "/backups", "t1", "extra"),
    ],
)
def test_create_rejects_wrong_arity(
    backend: StubBackend,
    capsys: pytest.CaptureFixture[str],
    args: tuple[str, ...],
) -> None:
    with pytest.raises(UsageError) as exc:
        CreateCommand(make_options(*args), backend.connect).run()

    assert exc.value.variant is CommandVariant.CREATE
    assert CREATE_USAGE in capsys.readouterr().err
    assert backend.connect_calls == 0


def test_create_rejects_unknown_backup_type(
    backend: StubBackend,
    capsys: pytest.CaptureFixture[str],
) -> None:
    with pytest.raises(UsageError):
        CreateCommand(make_options("create", "bogus", "/backups"), backend.connect).run()

    assert "invalid backup type: bogus" in capsys.readouterr().err
    assert backend.submitted == []


def test_create_rejects_table_list_together_with_set(
    backend: StubBackend,
    capsys: pytest.CaptureFixture[str],
) -> None:
    backend.sets["nightly"] = ["t1"]
    options = make_options("create", "full", "/backups", "t1", set="nightly")

    with pytest.raises(UsageError):
        CreateCommand(options, backend.connect).run()

    assert "mutually exclusive" in capsys.readouterr().err
    assert backend.submitted == []


@pytest.mark.parametrize("sets", [{}, {"nightly": []}])
def test_create_rejects_missing_or_empty_set(
    backend: StubBackend,
    capsys: pytest.CaptureFixture[str],
    sets: dict[str, list[str]],
) -> None:
    backend.sets.update(sets)

    with pytest.raises(UsageError):
        CreateCommand(make_options("create", "full", "/backups", set="nightly"), backend.connect).run()

    assert "'nightly' is either empty or does not exist" in capsys.readouterr().err
    assert backend.submitted == []
    assert backend.all_closed


@pytest.mark.parametrize("option", ["w", "b"])
@pytest.mark.parametrize("value", ["many", " 4 ", "1_000", "\u0664", "4.0"])
def test_create_rejects_non_numeric_tuning_options(
    backend: StubBackend,
    option: str,
    value: str,
) -> None:
    options = make_options("create", "full", "/backups", **{option: value})

    with pytest.raises(UsageError, match="Illegal argument"):
        CreateCommand(options, backend.connect).run()

    assert backend.connect_calls == 0


def test_create_accepts_signed_tuning_options(backend: StubBackend) -> None:
    options = make_options("create", "full", "/backups", w="+4", b="-1")

    CreateCommand(options, backend.connect).run()

    assert backend.submitted[0].workers == 4
    assert backend.submitted[0].bandwidth == -1


def test_create_rejects_illegal_table_names(backend: StubBackend) -> None:
    with pytest.raises(UsageError):
        CreateCommand(make_options("create", "full", "/backups", "bad name"), backend.connect).run()


def test_create_reports_failure_and_reraises_transport_error(
    backend: StubBackend,
    capsys: pytest.CaptureFixture[str],
) -> None:
    failure = TransportError("catalog unavailable")
    backend.submit_error = failure

    with pytest.raises(TransportError) as exc:
        CreateCommand(make_options("create", "full", "/backups"), backend.connect).run()

    assert exc.value is failure
    captured = capsys.readouterr()
    assert "Status: FAILURE" in captured.err
    assert "SUCCESS" not in captured.out
    assert backend.all_closed


def test_create_help_short_circuits_validation(
    backend: StubBackend,
    capsys: pytest.CaptureFixture[str],
) -> None:
    with pytest.raises(UsageError):
        CreateCommand(make_options("create", help_requested=True), backend.connect).run()

    assert capsys.readouterr().err == CREATE_USAGE
    assert backend.connect_calls == 0
