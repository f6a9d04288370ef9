from rvkern.dlist import ListEntry


def owners(head):
    return [entry.owner for entry in head]


def test_new_head_is_empty():
    head = ListEntry()
    assert head.empty()
    assert head.next is head and head.prev is head
    assert owners(head) == []


def test_add_inserts_after_head():
    head = ListEntry()
    head.add(ListEntry(1))
    head.add(ListEntry(2))
    assert owners(head) == [2, 1]
    assert not head.empty()


def test_add_before_head_appends():
    head = ListEntry()
    for n in (1, 2, 3):
        head.add_before(ListEntry(n))
    assert owners(head) == [1, 2, 3]


def test_add_after_middle_entry():
    head = ListEntry()
    first, last = ListEntry("a"), ListEntry("c")
    head.add_before(first)
    head.add_before(last)
    first.add_after(ListEntry("b"))
    assert owners(head) == ["a", "b", "c"]


def test_links_are_consistent():
    head = ListEntry()
    entries = [ListEntry(n) for n in range(4)]
    for entry in entries:
        head.add_before(entry)
    for entry in [head, *entries]:
        assert entry.next.prev is entry
        assert entry.prev.next is entry


def test_delete_unlinks():
    head = ListEntry()
    entries = [ListEntry(n) for n in range(3)]
    for entry in entries:
        head.add_before(entry)
    entries[1].delete()
    assert owners(head) == [0, 2]
    assert entries[0].next is entries[2]


def test_delete_leaves_own_links():
    head = ListEntry()
    a, b = ListEntry("a"), ListEntry("b")
    head.add_before(a)
    head.add_before(b)
    a.delete()
    assert a.next is b
    assert not a.empty()


def test_delete_init_makes_empty():
    head = ListEntry()
    a = ListEntry("a")
    head.add(a)
    a.delete_init()
    assert a.empty()
    assert head.empty()


def test_iteration_survives_deleting_current():
    head = ListEntry()
    for n in range(5):
        head.add_before(ListEntry(n))
    seen = []
    for entry in head:
        seen.append(entry.owner)
        if entry.owner % 2 == 0:
            entry.delete()
    assert seen == [0, 1, 2, 3, 4]
    assert owners(head) == [1, 3]


def test_head_prev_is_last():
    head = ListEntry()
    last = ListEntry("z")
    head.add_before(ListEntry("y"))
    head.add_before(last)
    assert head.prev is last