"""Tests for visibility-scoped reads on tours and users."""

import pytest

from app.application.services.auth_service import deactivate_user
from app.domain.models.tour import Tour
from app.domain.models.user import UserRole
from app.infrastructure.repositories.base_repository import SQLAlchemyRepository


def make_tour(repo, name, secret=False, difficulty="easy", price=500.0, rating=4.7, guides=()):
    tour = Tour(
        name=name,
        slug=name.lower().replace(" ", "-"),
        duration=5,
        max_group_size=10,
        difficulty=difficulty,
        ratings_average=rating,
        ratings_quantity=10,
        price=price,
        summary="A tour",
        secret_tour=secret,
        all_guides=list(guides),
    )
    return repo.save(tour)


@pytest.fixture
def tours(tour_repo):
    visible = make_tour(tour_repo, "The Forest Hiker")
    secret = make_tour(tour_repo, "The Secret Island", secret=True)
    return visible, secret


class TestTourVisibility:
    def test_list_hides_secret_tours(self, tour_repo, tours):
        visible, secret = tours
        assert [t.id for t in tour_repo.list()] == [visible.id]

    def test_list_including_private_returns_everything(self, tour_repo, tours):
        visible, secret = tours
        assert {t.id for t in tour_repo.list_including_private()} == {visible.id, secret.id}

    def test_get_by_id_hides_secret_tour(self, tour_repo, tours):
        visible, secret = tours
        assert tour_repo.get_by_id(visible.id).id == visible.id
        assert tour_repo.get_by_id(secret.id) is None
        assert tour_repo.get_by_id_including_private(secret.id).id == secret.id

    def test_find_and_count_are_scoped(self, tour_repo, tours):
        assert tour_repo.find_by_slug("the-secret-island") is None
        assert tour_repo.find_by_slug("the-forest-hiker") is not None
        assert tour_repo.count() == 1

    def test_aggregation_sees_only_visible_rows(self, tour_repo):
        make_tour(tour_repo, "The Sea Explorer", difficulty="medium", price=400.0)
        make_tour(tour_repo, "The Park Camper", difficulty="medium", price=600.0)
        make_tour(tour_repo, "The Hidden Valley", difficulty="medium", price=5000.0, secret=True)
        make_tour(tour_repo, "The Sports Lover", difficulty="difficult", price=2000.0, secret=True)

        stats = tour_repo.get_stats_by_difficulty()

        assert [s["difficulty"] for s in stats] == ["MEDIUM"]
        assert stats[0]["num_tours"] == 2
        assert stats[0]["avg_price"] == 500.0
        assert stats[0]["max_price"] == 600.0

    def test_aggregation_applies_rating_threshold_after_visibility(self, tour_repo):
        make_tour(tour_repo, "The Snow Adventurer", rating=4.0)
        make_tour(tour_repo, "The City Wanderer", rating=4.9)

        stats = tour_repo.get_stats_by_difficulty(min_rating=4.5)
        assert stats[0]["num_tours"] == 1

    def test_writes_are_not_filtered(self, tour_repo, tours):
        visible, secret = tours
        secret.price = 999.0
        tour_repo.save(secret)
        assert tour_repo.get_by_id_including_private(secret.id).price == 999.0


class TestUserVisibility:
    def test_deactivated_users_hidden_from_reads(self, make_user, user_repo):
        alice = make_user(email="alice@example.com")
        bob = make_user(email="bob@example.com")
        deactivate_user(user_repo, bob)

        assert [u.id for u in user_repo.list()] == [alice.id]
        assert user_repo.get_by_id(bob.id) is None
        assert user_repo.find_by_email("bob@example.com") is None
        assert {u.id for u in user_repo.list_including_inactive()} == {alice.id, bob.id}

    def test_tour_guides_hide_deactivated_accounts(self, make_user, user_repo, tour_repo, db):
        lead = make_user(email="lead@example.com", role=UserRole.LEAD_GUIDE)
        guide = make_user(email="guide@example.com", role=UserRole.GUIDE)
        tour = make_tour(tour_repo, "The Northern Lights", guides=[lead, guide])

        deactivate_user(user_repo, guide)
        db.expire_all()
        tour = tour_repo.get_by_id(tour.id)

        assert [g.id for g in tour.guides] == [lead.id]
        assert {g.id for g in tour.all_guides} == {lead.id, guide.id}


class TestRepositoryBase:
    def test_repository_without_visibility_rule_cannot_be_built(self, db):
        with pytest.raises(TypeError):
            SQLAlchemyRepository(db, Tour)
