import pytest

from ibadah_tracker.core.setup import SETUP_STEPS, advance, parse_amount


class TestParseAmount:

    @pytest.mark.parametrize("text, expected", [
        ("20", 20),
        (" 7 ", 7),
        ("0", 0),
        ("2,5", 3),
        ("2.4", 2),
    ])
    def test_valid(self, text, expected):
        assert parse_amount(text) == expected

    @pytest.mark.parametrize("text", ["-1", "abc", "", "nan", "inf", None])
    def test_invalid(self, text):
        assert parse_amount(text) is None


class TestAdvance:

    def test_step_order(self):
        assert [s.key for s in SETUP_STEPS] == [
            "quran_pages", "istighfar_count", "dhikr_count", "charity_amount", "dua_count",
        ]

    def test_number_advances(self):
        transition = advance(0, "15")
        assert transition.accepted
        assert transition.key == "quran_pages"
        assert transition.value == 15
        assert transition.next_step == 1
        assert not transition.complete

    @pytest.mark.parametrize("word", ["по умолчанию", "По умолчанию", "default"])
    def test_default_word(self, word):
        transition = advance(1, word)
        assert transition.accepted
        assert transition.value == 500

    def test_invalid_input_stays_on_step(self):
        transition = advance(2, "-5")
        assert not transition.accepted
        assert transition.step == 2
        assert transition.key is None
        assert not transition.complete

    def test_last_step_completes(self):
        transition = advance(len(SETUP_STEPS) - 1, "3")
        assert transition.accepted
        assert transition.next_step is None
        assert transition.complete

    def test_full_walk(self):
        step, saved = 0, {}
        for answer in ["10", "default", "abc", "200", "50", "по умолчанию"]:
            transition = advance(step, answer)
            if not transition.accepted:
                continue
            saved[transition.key] = transition.value
            if transition.complete:
                break
            step = transition.next_step
        assert saved == {
            "quran_pages": 10,
            "istighfar_count": 500,
            "dhikr_count": 200,
            "charity_amount": 50,
            "dua_count": 3,
        }
