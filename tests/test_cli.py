"""
Tests for the ThreadBoard command line
"""

from unittest.mock import patch

import pytest
from argon2 import PasswordHasher

from threadboard.__main__ import main, run_users
from threadboard.config import load_config
from threadboard.core.accounts import AccountService
from threadboard.core.crypto import PasswordManager
from threadboard.db.connection import Database
from threadboard.db.messages import MessageRepository


def write_config(tmp_path):
    path = tmp_path / "config.toml"
    db_path = tmp_path / "board.db"
    path.write_text(
        '[board]\n'
        'secret_key = "test"\n'
        '\n'
        '[database]\n'
        f'path = "{db_path.as_posix()}"\n'
        '\n'
        '[crypto]\n'
        'argon2_time_cost = 1\n'
        'argon2_memory_kb = 8192\n'
    )
    return path, db_path


def run(argv):
    with pytest.raises(SystemExit) as exc:
        main(argv)
    return exc.value.code


class TestCommands:
    """Tests for CLI subcommands."""

    def test_init_db(self, tmp_path):
        config_path, db_path = write_config(tmp_path)

        assert run(["-c", str(config_path), "init-db"]) == 0
        assert db_path.exists()

    def test_users_empty(self, tmp_path, capsys):
        config_path, _ = write_config(tmp_path)

        assert run(["-c", str(config_path), "users"]) == 0
        assert "No users registered." in capsys.readouterr().out

    def test_users_and_delete(self, tmp_path, capsys):
        config_path, db_path = write_config(tmp_path)

        db = Database(str(db_path))
        db.initialize()
        accounts = AccountService(db, PasswordManager(time_cost=1, memory_cost_kb=8192))
        alice, _ = accounts.register("alice", "alice@example.com", "pw")
        MessageRepository(db).create_message(alice.id, "hello")
        db.close()

        assert run(["-c", str(config_path), "users"]) == 0
        out = capsys.readouterr().out
        assert "alice" in out
        assert "alice@example.com" in out

        assert run(["-c", str(config_path), "delete-user", "alice"]) == 0
        assert run(["-c", str(config_path), "delete-user", "alice"]) == 1

        db = Database(str(db_path))
        db.initialize()
        assert db.count_users() == 0
        assert db.count_messages() == 0
        db.close()

    def test_config_validate(self, tmp_path, capsys):
        config_path, _ = write_config(tmp_path)

        assert run(["-c", str(config_path), "config", "--validate"]) == 0
        assert "valid" in capsys.readouterr().out

    def test_config_init_refuses_overwrite(self, tmp_path):
        config_path, _ = write_config(tmp_path)

        assert run(["-c", str(config_path), "config", "--init"]) == 1

    def test_config_init(self, tmp_path):
        config_path = tmp_path / "new.toml"

        assert run(["-c", str(config_path), "config", "--init"]) == 0
        assert config_path.exists()

    def test_users_listing_notes_limit(self, tmp_path, capsys):
        config_path, db_path = write_config(tmp_path)

        db = Database(str(db_path))
        db.initialize()
        accounts = AccountService(db, PasswordManager(time_cost=1, memory_cost_kb=8192))
        accounts.register("alice", "alice@example.com", "pw")
        accounts.register("bob", "bob@example.com", "pw")
        db.close()

        assert run_users(load_config(config_path), limit=1) == 0
        out = capsys.readouterr().out
        assert "alice" in out
        assert "bob" not in out
        assert "showing the first 1 users" in out

    def test_users_listing_under_limit_has_no_notice(self, tmp_path, capsys):
        config_path, db_path = write_config(tmp_path)

        db = Database(str(db_path))
        db.initialize()
        AccountService(db, PasswordManager(time_cost=1, memory_cost_kb=8192)).register(
            "alice", "alice@example.com", "pw"
        )
        db.close()

        assert run_users(load_config(config_path), limit=1) == 0
        assert "showing the first" not in capsys.readouterr().out

    def test_delete_user_does_no_hashing(self, tmp_path):
        config_path, _ = write_config(tmp_path)

        with patch.object(PasswordHasher, "hash") as argon2_hash:
            assert run(["-c", str(config_path), "delete-user", "nobody"]) == 1

        argon2_hash.assert_not_called()
