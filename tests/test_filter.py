from pcmkit.filter import FilterChain, FilterFlow, Frame, gain_filter
from pcmkit.fixed import F_ONE


def _frame(value, channels=2, samples=3):
    return Frame([[[value] * 32 for _ in range(samples)] for _ in range(channels)])


def test_empty_chain_continues():
    chain = FilterChain()
    assert len(chain) == 0
    assert chain.run(_frame(0)) == FilterFlow.CONTINUE


def test_prepend_runs_newest_first():
    calls = []

    def record(name, frame):
        calls.append(name)
        return FilterFlow.CONTINUE

    chain = FilterChain()
    chain.prepend(record, "a")
    chain.prepend(record, "b")
    assert len(chain) == 2
    assert chain.run(_frame(0)) == FilterFlow.CONTINUE
    assert calls == ["b", "a"]


def test_chain_stops_at_first_non_continue():
    calls = []

    def stop(data, frame):
        calls.append("stop")
        return FilterFlow.IGNORE

    def later(data, frame):
        calls.append("later")
        return FilterFlow.CONTINUE

    chain = FilterChain()
    chain.prepend(later)
    chain.prepend(stop)
    assert chain.run(_frame(0)) == FilterFlow.IGNORE
    assert calls == ["stop"]


def test_frame_dimensions():
    frame = _frame(1, channels=1, samples=12)
    assert frame.nchannels == 1
    assert frame.nsbsamples == 12


def test_unity_gain_leaves_samples():
    frame = _frame(1234)
    assert gain_filter(F_ONE, frame) == FilterFlow.CONTINUE
    assert frame == _frame(1234)


def test_half_gain_halves_samples():
    frame = _frame(1000)
    gain_filter(F_ONE // 2, frame)
    assert frame == _frame(500)


def test_double_gain_doubles_samples():
    frame = _frame(-300)
    gain_filter(2 * F_ONE, frame)
    assert frame == _frame(-600)


def test_gain_from_callable_read_at_run_time():
    state = {"gain": F_ONE}
    chain = FilterChain()
    chain.prepend(gain_filter, lambda: state["gain"])
    state["gain"] = F_ONE // 2
    frame = _frame(800)
    assert chain.run(frame) == FilterFlow.CONTINUE
    assert frame == _frame(400)