"""
Tests for the account, profile and favorites services against real
temporary data files.
"""

import json
import os
import threading

import pytest

from core.errors import (
    ConflictError,
    NotFoundError,
    UnauthorizedError,
    ValidationError,
)


def _register(services, email="a@x.com", password="p1", fullname="Ana"):
    return services.accounts.register(fullname, email, password)


class TestAccountService:
    def test_register_stores_defaults(self, services):
        user = _register(services)
        stored = services.users.find_by_id(user.id)
        assert stored.fullname == "Ana"
        assert stored.phone_number == ""
        assert stored.favorites == []
        assert stored.password_hash != "p1"

    @pytest.mark.parametrize("fullname,email,password", [
        ("", "a@x.com", "p1"),
        ("Ana", None, "p1"),
        ("Ana", "a@x.com", ""),
    ])
    def test_register_requires_all_fields(self, services, fullname, email, password):
        with pytest.raises(ValidationError):
            services.accounts.register(fullname, email, password)
        assert services.users.load() == []

    def test_register_keeps_existing_legacy_records(self, services, settings):
        with open(settings.users_db_path, "w", encoding="utf-8") as fh:
            json.dump([
                {"id": 1, "fullname": "Ana", "email": "a@x.com", "password": "h",
                 "phoneNumber": "", "favorites": []},
                {"id": 2, "fullname": "Bo", "email": "b@x.com", "password": "h",
                 "phoneNumber": None, "favorites": None},
            ], fh)

        services.accounts.register("Cy", "c@x.com", "p1")

        emails = [u.email for u in services.users.load()]
        assert emails == ["a@x.com", "b@x.com", "c@x.com"]

    def test_register_reports_missing_field(self, services):
        with pytest.raises(ValidationError) as exc_info:
            services.accounts.register("Ana", "", "p1")
        assert exc_info.value.field == "email"

    def test_duplicate_email_conflicts(self, services):
        _register(services)
        with pytest.raises(ConflictError):
            _register(services, password="other")

    def test_email_match_is_case_sensitive(self, services):
        _register(services, email="a@x.com")
        _register(services, email="A@x.com")
        assert len(services.users.load()) == 2

    def test_ids_are_unique(self, services):
        ids = {_register(services, email=f"u{i}@x.com").id for i in range(5)}
        assert len(ids) == 5

    def test_login_returns_token_for_same_user(self, services):
        user = _register(services)
        result = services.accounts.login("a@x.com", "p1")
        assert result["user"] == {"fullname": "Ana"}
        claim = services.tokens.verify(result["token"])
        assert claim.id == user.id

    def test_login_unknown_email(self, services):
        with pytest.raises(NotFoundError):
            services.accounts.login("ghost@x.com", "p1")

    def test_login_wrong_password(self, services):
        _register(services)
        with pytest.raises(UnauthorizedError):
            services.accounts.login("a@x.com", "wrong")


class TestProfileService:
    def test_get_profile(self, services):
        user = _register(services)
        assert services.profiles.get_profile(user.id) == {
            "fullname": "Ana", "email": "a@x.com", "phoneNumber": "",
        }

    def test_missing_user(self, services):
        with pytest.raises(NotFoundError):
            services.profiles.get_profile(123)
        with pytest.raises(NotFoundError):
            services.profiles.update_profile(123, "A", "a@x.com", "1")
        with pytest.raises(NotFoundError):
            services.profiles.change_password(123, "old", "new")

    def test_update_overwrites_all_fields(self, services):
        user = _register(services)
        services.profiles.update_profile(user.id, "Ana B", "b@x.com", "0812")
        assert services.profiles.get_profile(user.id) == {
            "fullname": "Ana B", "email": "b@x.com", "phoneNumber": "0812",
        }

    def test_update_does_not_recheck_email_uniqueness(self, services):
        _register(services, email="a@x.com")
        other = _register(services, email="b@x.com")
        services.profiles.update_profile(other.id, "Bo", "a@x.com", "")
        emails = [u.email for u in services.users.load()]
        assert emails == ["a@x.com", "a@x.com"]

    def test_change_password(self, services):
        user = _register(services)
        services.profiles.change_password(user.id, "p1", "p2")
        assert services.accounts.login("a@x.com", "p2")["token"]
        with pytest.raises(UnauthorizedError):
            services.accounts.login("a@x.com", "p1")

    def test_change_password_wrong_old(self, services):
        user = _register(services)
        with pytest.raises(UnauthorizedError):
            services.profiles.change_password(user.id, "nope", "p2")

    def test_change_password_requires_both(self, services):
        user = _register(services)
        with pytest.raises(ValidationError):
            services.profiles.change_password(user.id, "p1", "")


class TestFavoritesService:
    def test_add_is_idempotent(self, services):
        user = _register(services)
        services.favorites.add(user.id, "timun-mas")
        services.favorites.add(user.id, "timun-mas")
        assert services.users.find_by_id(user.id).favorites == ["timun-mas"]
        assert services.favorites.status(user.id, "timun-mas") is True

    def test_add_existing_does_not_rewrite(self, services, settings):
        user = _register(services)
        services.favorites.add(user.id, "timun-mas")
        os.utime(settings.users_db_path, (0, 0))
        services.favorites.add(user.id, "timun-mas")
        assert os.stat(settings.users_db_path).st_mtime == 0

    def test_remove_then_status_false(self, services):
        user = _register(services)
        services.favorites.add(user.id, "timun-mas")
        services.favorites.remove(user.id, "timun-mas")
        assert services.favorites.status(user.id, "timun-mas") is False

    def test_remove_never_favorited(self, services):
        user = _register(services)
        services.favorites.remove(user.id, "sangkuriang")
        assert services.favorites.status(user.id, "sangkuriang") is False

    def test_story_id_match_is_exact(self, services):
        user = _register(services)
        services.favorites.add(user.id, "Timun-Mas")
        assert services.favorites.status(user.id, "timun-mas") is False

    def test_list_resolves_and_drops_stale_ids(self, services):
        user = _register(services)
        for sid in ["sangkuriang", "gone-story", "malin-kundang"]:
            services.favorites.add(user.id, sid)
        stories = services.favorites.list(user.id)
        assert [s["id"] for s in stories] == ["malin-kundang", "sangkuriang"]
        assert stories[0]["title"] == "Malin Kundang"

    def test_favorites_are_per_user(self, services):
        ana = _register(services, email="a@x.com")
        bo = _register(services, email="b@x.com")
        services.favorites.add(ana.id, "timun-mas")
        assert services.favorites.status(bo.id, "timun-mas") is False

    def test_missing_user(self, services):
        for call in (
            lambda: services.favorites.status(1, "x"),
            lambda: services.favorites.add(1, "x"),
            lambda: services.favorites.remove(1, "x"),
            lambda: services.favorites.list(1),
        ):
            with pytest.raises(NotFoundError):
                call()


class TestConcurrentWriters:
    def test_parallel_adds_for_different_users_all_survive(self, services):
        users = [_register(services, email=f"u{i}@x.com") for i in range(8)]

        def worker(user):
            for sid in ("malin-kundang", "timun-mas", "sangkuriang"):
                services.favorites.add(user.id, sid)

        threads = [threading.Thread(target=worker, args=(u,)) for u in users]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        stored = services.users.load()
        assert len(stored) == 8
        for user in stored:
            assert sorted(user.favorites) == ["malin-kundang", "sangkuriang", "timun-mas"]

    def test_parallel_registrations_all_survive(self, services):
        threads = [
            threading.Thread(target=_register, args=(services,), kwargs={"email": f"r{i}@x.com"})
            for i in range(8)
        ]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        stored = services.users.load()
        assert sorted(u.email for u in stored) == sorted(f"r{i}@x.com" for i in range(8))
        assert len({u.id for u in stored}) == 8
