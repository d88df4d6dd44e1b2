from seqpredict.analytics.markov import TransitionTracker


def test_transition_counts():
    mk = TransitionTracker()
    mk.build_from([1.5, 3.0, 4.5, 4.0, 1.2])
    assert mk.C == {"0->1": 1, "1->2": 1, "2->2": 1, "2->0": 1}
    st = mk.stats()
    assert st.counts[2] == [1, 0, 1]
    assert st.transition[2] == [0.5, 0.0, 0.5]
    assert st.transition[0] == [0.0, 1.0, 0.0]
    assert st.category_counts == {"Low": 2, "Mid": 1, "High": 2}


def test_rebuild_is_idempotent():
    mk = TransitionTracker()
    seq = [1.0, 1.0, 3.0, 1.0]
    mk.build_from(seq)
    first = dict(mk.C)
    mk.build_from(seq)
    assert mk.C == first


def test_entropy():
    mk = TransitionTracker()
    mk.build_from([1.5, 1.6])
    assert mk.stats().entropy == 0.0
    mk.build_from([1.5, 4.5])
    assert mk.stats().entropy == 1.0


def test_load_restores_counts_verbatim():
    mk = TransitionTracker()
    mk.load({"0->0": 7}, [1.5])
    assert mk.count(0, 0) == 7
    assert mk.stats().category_counts["Low"] == 1
