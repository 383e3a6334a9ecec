from soundstage.core.observable import ValueNotifier


def test_listener_called_on_change():
    notifier = ValueNotifier(False)
    seen = []
    notifier.add_listener(lambda: seen.append(notifier.value))

    notifier.value = True
    notifier.value = False

    assert seen == [True, False]


def test_same_value_does_not_notify():
    notifier = ValueNotifier(3)
    seen = []
    notifier.add_listener(lambda: seen.append(notifier.value))

    notifier.value = 3

    assert seen == []


def test_remove_listener():
    notifier = ValueNotifier("a")
    seen = []
    listener = lambda: seen.append(notifier.value)  # noqa: E731
    notifier.add_listener(listener)
    notifier.remove_listener(listener)

    notifier.value = "b"

    assert seen == []
    assert not notifier.has_listeners


def test_remove_unknown_listener_is_ignored():
    notifier = ValueNotifier(0)
    notifier.remove_listener(lambda: None)
    assert notifier.listener_count() == 0


def test_bound_method_removal():
    class Owner:
        def __init__(self):
            self.calls = 0

        def on_change(self):
            self.calls += 1

    owner = Owner()
    notifier = ValueNotifier(0)
    notifier.add_listener(owner.on_change)
    notifier.remove_listener(owner.on_change)

    notifier.value = 1
    assert owner.calls == 0


def test_listener_may_remove_itself():
    notifier = ValueNotifier(0)
    calls = []

    def once():
        calls.append(notifier.value)
        notifier.remove_listener(once)

    notifier.add_listener(once)
    notifier.value = 1
    notifier.value = 2

    assert calls == [1]


def test_failing_listener_does_not_block_others(caplog):
    notifier = ValueNotifier(0)
    seen = []

    def broken():
        raise ValueError("bad listener")

    notifier.add_listener(broken)
    notifier.add_listener(lambda: seen.append(notifier.value))

    notifier.value = 1

    assert seen == [1]
    assert "bad listener" in caplog.text
