from models import Expense, ExpenseItem, Member
from notifications import ChangeWatcher, NotificationQueue


class FakeClock:
    def __init__(self):
        self.now = 1000.0

    def __call__(self):
        return self.now


def test_queue_keeps_three_newest():
    q = NotificationQueue(clock=FakeClock())
    for n in range(5):
        q.push("info", f"t{n}", "m")
    assert [n.title for n in q.visible()] == ["t4", "t3", "t2"]


def test_queue_expires_items():
    clock = FakeClock()
    q = NotificationQueue(clock=clock)
    q.push("info", "old", "m")
    clock.now += 4
    q.push("info", "new", "m")
    clock.now += 3
    assert [n.title for n in q.visible()] == ["new"]
    clock.now += 10
    assert q.visible() == []


def test_dismiss():
    q = NotificationQueue(clock=FakeClock())
    a = q.push("info", "a", "m")
    q.push("info", "b", "m")
    q.dismiss(a.id)
    assert [n.title for n in q.visible()] == ["b"]


def test_watcher_ignores_first_snapshot():
    q = NotificationQueue(clock=FakeClock())
    w = ChangeWatcher(q)
    karim = Member(id="m1", name="Karim", house_name="h")
    w.on_members([karim])
    assert len(q) == 0
    w.on_members([karim, Member(id="m2", name="Rahim", house_name="h")])
    [note] = q.visible()
    assert note.type == "info"
    assert "Rahim" in note.message
    assert note.action_view == "Members"


def test_watcher_flags_large_expenses():
    q = NotificationQueue(clock=FakeClock())
    w = ChangeWatcher(q)
    w.on_expenses([])
    small = Expense(id="e1", category="Snacks", description="Tea", date="2026-03-01", items=(ExpenseItem("চা", 100),))
    big = Expense(id="e2", category="Salary", description="Guard", date="2026-03-01", items=(ExpenseItem("Mar", 5000),))
    w.on_expenses([small])
    w.on_expenses([small, big])
    types = [n.type for n in q.visible()]
    assert types == ["alert", "warning"]
    assert "৳5,000" in q.visible()[0].message
