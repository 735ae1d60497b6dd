"""Tests for person CLI commands."""

from balancebook.cli.main import cli


def _create_person(cli_runner, cli_args, *extra):
    result = cli_runner.invoke(cli, cli_args + ["person", "create", *extra])
    assert result.exit_code == 0, result.output
    return result


def test_create_and_list(cli_runner, cli_args):
    result = _create_person(cli_runner, cli_args, "Maria Silva", "--document", "123.456.789-09")
    assert "Created person 'Maria Silva' (ID: 1)" in result.output

    result = cli_runner.invoke(cli, cli_args + ["person", "list"])
    assert result.exit_code == 0
    assert "Maria Silva" in result.output
    assert "0.00" in result.output


def test_list_empty(cli_runner, cli_args):
    result = cli_runner.invoke(cli, cli_args + ["person", "list"])
    assert result.exit_code == 0
    assert "No people found." in result.output


def test_duplicate_document_rejected(cli_runner, cli_args):
    _create_person(cli_runner, cli_args, "Maria Silva", "--document", "123.456.789-09")

    result = cli_runner.invoke(
        cli, cli_args + ["person", "create", "Other", "--document", "12345678909"]
    )
    assert result.exit_code == 1
    assert "Error:" in result.output
    assert "already exists" in result.output


def test_show_by_document_and_name(cli_runner, cli_args):
    _create_person(
        cli_runner, cli_args, "ACME Ltda", "--type", "company", "--document", "11.222.333/0001-81"
    )

    result = cli_runner.invoke(cli, cli_args + ["person", "show", "11222333000181"])
    assert result.exit_code == 0
    assert "ACME Ltda (ID: 1, company)" in result.output
    assert "No financial records." in result.output

    result = cli_runner.invoke(cli, cli_args + ["person", "show", "ACME Ltda"])
    assert result.exit_code == 0
    assert "Document: 11222333000181" in result.output


def test_show_unknown_person(cli_runner, cli_args):
    result = cli_runner.invoke(cli, cli_args + ["person", "show", "Nobody"])
    assert result.exit_code == 1
    assert "Person 'Nobody' not found" in result.output


def test_ambiguous_name(cli_runner, cli_args):
    _create_person(cli_runner, cli_args, "Joao")
    _create_person(cli_runner, cli_args, "Joao")

    result = cli_runner.invoke(cli, cli_args + ["person", "show", "Joao"])
    assert result.exit_code == 1
    assert "ambiguous" in result.output


def test_update_person(cli_runner, cli_args):
    _create_person(cli_runner, cli_args, "Maria")

    result = cli_runner.invoke(
        cli, cli_args + ["person", "update", "1", "--email", "maria@example.com", "--name", "Maria S."]
    )
    assert result.exit_code == 0
    assert "Updated person 1" in result.output

    result = cli_runner.invoke(cli, cli_args + ["person", "show", "1"])
    assert "Maria S. (ID: 1, person)" in result.output
    assert "Email: maria@example.com" in result.output


def test_update_nothing(cli_runner, cli_args):
    _create_person(cli_runner, cli_args, "Maria")
    result = cli_runner.invoke(cli, cli_args + ["person", "update", "1"])
    assert result.exit_code == 0
    assert "Nothing to update." in result.output


def test_delete_person(cli_runner, cli_args):
    _create_person(cli_runner, cli_args, "Maria")

    result = cli_runner.invoke(cli, cli_args + ["person", "delete", "1"], input="n\n")
    assert "Deletion cancelled." in result.output

    result = cli_runner.invoke(cli, cli_args + ["person", "delete", "1", "--yes"])
    assert result.exit_code == 0
    assert "Deleted person 'Maria' (ID: 1)" in result.output


def test_delete_person_with_records(cli_runner, cli_args):
    _create_person(cli_runner, cli_args, "Maria")
    result = cli_runner.invoke(
        cli,
        cli_args
        + [
            "receivable", "create", "--description", "Invoice", "--amount", "100",
            "--due-date", "2024-03-01", "--category", "Work", "--person", "Maria",
        ],
    )
    assert result.exit_code == 0, result.output

    result = cli_runner.invoke(cli, cli_args + ["person", "delete", "Maria", "--yes"])
    assert result.exit_code == 1
    assert "1 receivable" in result.output


def test_owner_is_required(cli_runner, temp_db):
    result = cli_runner.invoke(
        cli, ["--db-path", temp_db.database_path, "person", "list"], env={"BALANCEBOOK_OWNER": None}
    )
    assert result.exit_code == 1
    assert "User not authenticated" in result.output


def test_people_are_scoped_to_owner(cli_runner, cli_args, temp_db):
    _create_person(cli_runner, cli_args, "Maria")

    result = cli_runner.invoke(
        cli, ["--db-path", temp_db.database_path, "--owner", "bob", "person", "show", "1"]
    )
    assert result.exit_code == 1
    assert "not found" in result.output
