"""Tests for the Card review state machine and the interval schedule."""

import pytest

from smart_learner.domain.errors import ScheduleError
from smart_learner.domain.models import Card, Field, Grade, IntervalSchedule, Side


class TestIntervalSchedule:
    def test_max_tier_and_lookup(self, schedule):
        assert schedule.max_tier == 5
        assert schedule.interval(0) == 0
        assert schedule.interval(5) == 30

    def test_accepts_list(self):
        assert IntervalSchedule([0, 2, 2, 5]).intervals == (0, 2, 2, 5)

    @pytest.mark.parametrize("table", [(), (1, 2, 3), (0, 5, 3), (0, -1), (0,), (0, 0, 0), (0, 0, 5)])
    def test_rejects_invalid_tables(self, table):
        with pytest.raises(ScheduleError):
            IntervalSchedule(table)

    def test_tier_out_of_range(self, schedule):
        with pytest.raises(ScheduleError):
            schedule.interval(6)
        with pytest.raises(ScheduleError):
            schedule.interval(-1)


class TestCardBasics:
    def test_new_card_is_due_today(self, today):
        card = Card.new(Field("q"), Field("a"), today)
        assert card.tier == 0
        assert card.due_date == today
        assert card.is_due(today)

    def test_edit_keeps_schedule_and_audio(self, today, make_card):
        card = make_card("q", "a", due=today.plus_days(3), tier=2)
        card.set_audio(Side.FRONT, "q.mp3")

        card.edit("new q", "new a")

        assert (card.front.text, card.back.text) == ("new q", "new a")
        assert card.tier == 2
        assert card.due_date == today.plus_days(3)
        assert card.front.audio == "q.mp3"

    def test_audio_is_per_side(self, make_card):
        card = make_card("q", "a")
        card.set_audio(Side.BACK, "a.ogg")

        assert card.has_audio(Side.BACK)
        assert not card.has_audio(Side.FRONT)

        card.clear_audio(Side.BACK)
        assert not card.has_audio(Side.BACK)
        assert card.back.text == "a"

    def test_future_card_is_not_due(self, today, make_card):
        card = make_card("q", due=today.plus_days(1))
        assert not card.is_due(today)
        assert card.is_due(today.plus_days(1))


class TestReview:
    def test_wrong_resets_to_today(self, today, schedule, make_card):
        card = make_card("q", due=today, tier=4)
        card.review(Grade.WRONG, today, schedule)

        assert card.tier == 0
        assert card.due_date == today
        assert card.is_due(today)

    def test_easy_advances_one_tier(self, today, schedule, make_card):
        card = make_card("q", tier=1)
        card.review(Grade.EASY, today, schedule)

        assert card.tier == 2
        assert card.due_date == today.plus_days(3)

    def test_easy_is_capped_at_max_tier(self, today, schedule, make_card):
        card = make_card("q", tier=schedule.max_tier)
        card.review(Grade.EASY, today, schedule)

        assert card.tier == schedule.max_tier
        assert card.due_date == today.plus_days(30)

    def test_difficult_keeps_tier(self, today, schedule, make_card):
        card = make_card("q", tier=3)
        card.review(Grade.DIFFICULT, today, schedule)

        assert card.tier == 3
        assert card.due_date == today.plus_days(7)

    def test_difficult_moves_new_card_past_today(self, today, schedule, make_card):
        card = make_card("q", tier=0)
        card.review(Grade.DIFFICULT, today, schedule)

        assert card.tier == 1
        assert not card.is_due(today)

    def test_difficult_never_exceeds_easy(self, today, schedule, make_card):
        for tier in range(schedule.max_tier + 1):
            difficult = make_card("q", tier=tier)
            easy = make_card("q", tier=tier)
            difficult.review(Grade.DIFFICULT, today, schedule)
            easy.review(Grade.EASY, today, schedule)

            assert tier <= difficult.tier <= easy.tier
            assert difficult.due_date <= easy.due_date

    def test_repeated_easy_never_moves_backward(self, today, schedule, make_card):
        card = make_card("q")
        day = today
        previous_due = card.due_date

        for _ in range(10):
            card.review(Grade.EASY, day, schedule)
            assert card.due_date >= previous_due
            previous_due = card.due_date
            day = card.due_date

        assert card.tier == schedule.max_tier

    @pytest.mark.parametrize("grade", [Grade.DIFFICULT, Grade.EASY])
    def test_tier_beyond_schedule_is_kept(self, today, schedule, grade, make_card):
        # Stored under a longer table; only the interval lookup is clamped
        card = make_card("q", tier=12)
        card.review(grade, today, schedule)

        assert card.tier == 12
        assert card.due_date == today.plus_days(30)

    def test_only_wrong_lowers_tier(self, today, schedule, make_card):
        for tier in range(schedule.max_tier + 3):
            for grade in (Grade.DIFFICULT, Grade.EASY):
                card = make_card("q", tier=tier)
                card.review(grade, today, schedule)
                assert card.tier >= tier

    def test_shortest_schedule(self, today, make_card):
        schedule = IntervalSchedule((0, 1))
        card = make_card("q")

        card.review(Grade.EASY, today, schedule)
        assert card.tier == 1
        card.review(Grade.EASY, today, schedule)
        assert card.tier == 1
        assert card.due_date == today.plus_days(1)

    @pytest.mark.parametrize("grade", [Grade.DIFFICULT, Grade.EASY])
    def test_passing_grade_always_leaves_today(self, today, grade, make_card):
        schedule = IntervalSchedule((0, 1, 1, 4))
        for tier in range(schedule.max_tier + 1):
            card = make_card("q", tier=tier)
            card.review(grade, today, schedule)
            assert not card.is_due(today)
