"""Tests for split hand play."""

from cardutil import cards
from twentyone.game import Phase, SplitStatus, split_hit, split_stand


class TestSplitHit:
    """Tests for split_hit()."""

    def test_hits_active_hand_only(self, make_split_state):
        state = make_split_state("8S 3C", "8H 9D", deck="2C")
        hit = split_hit(state)

        first, second = hit.split_hands
        assert first.cards == cards("8S 3C 2C")
        assert first.status == SplitStatus.PLAYING
        assert second == state.split_hands[1]
        assert hit.active_hand_index == 0
        assert hit.phase == Phase.PLAYING

    def test_bust_moves_to_next_hand(self, make_split_state):
        hit = split_hit(make_split_state("8S 6C", "8H 9D", deck="KC"))

        assert hit.split_hands[0].status == SplitStatus.BUST
        assert hit.active_hand_index == 1
        assert hit.phase == Phase.PLAYING

    def test_21_stands(self, make_split_state):
        hit = split_hit(make_split_state("8S 3C", "8H 9D", deck="KC"))

        assert hit.split_hands[0].status == SplitStatus.STAND
        assert hit.active_hand_index == 1

    def test_last_hand_done_hands_over_to_dealer(self, make_split_state):
        state = make_split_state(
            "8S 3C KD",
            "8H 6D",
            deck="9C",
            active_index=1,
            statuses=(SplitStatus.STAND, SplitStatus.PLAYING),
        )
        hit = split_hit(state)

        assert hit.split_hands[1].status == SplitStatus.BUST
        assert hit.phase == Phase.DEALER_TURN

    def test_input_untouched(self, make_split_state):
        state = make_split_state("8S 3C", "8H 9D", deck="2C")
        split_hit(state)
        assert state.split_hands[0].cards == cards("8S 3C")
        assert len(state.deck) == 1


class TestSplitStand:
    """Tests for split_stand()."""

    def test_stand_first_hand(self, make_split_state):
        stood = split_stand(make_split_state("8S 3C", "8H 9D"))

        assert stood.split_hands[0].status == SplitStatus.STAND
        assert stood.split_hands[1].status == SplitStatus.PLAYING
        assert stood.active_hand_index == 1
        assert stood.phase == Phase.PLAYING

    def test_stand_both_hands(self, make_split_state):
        state = split_stand(split_stand(make_split_state("8S 3C", "8H 9D")))

        assert [h.status for h in state.split_hands] == [SplitStatus.STAND, SplitStatus.STAND]
        assert state.phase == Phase.DEALER_TURN

    def test_stand_second_hand_returns_to_first_if_still_playing(self, make_split_state):
        state = make_split_state("8S 3C", "8H 9D", active_index=1)
        stood = split_stand(state)

        assert stood.active_hand_index == 0
        assert stood.phase == Phase.PLAYING

    def test_does_not_touch_chips(self, make_split_state):
        state = make_split_state("8S 3C", "8H 9D")
        assert split_stand(state).chips == state.chips
