import threading

from statement_ingest.application.locks import DepotLocks


def test_same_depot_shares_a_lock_while_referenced():
    locks = DepotLocks()

    first = locks.lock_for("D1")

    assert locks.lock_for("D1") is first
    assert locks.lock_for("D2") is not first
    assert len(locks) == 1


def test_lock_is_held_inside_hold():
    locks = DepotLocks()

    with locks.hold("D1"):
        lock = locks.lock_for("D1")
        assert lock.locked()
        assert not locks.lock_for("D2").locked()
    assert not lock.locked()


def test_released_depots_leave_the_registry():
    locks = DepotLocks()

    for index in range(100):
        with locks.hold(f"D{index}"):
            pass

    assert len(locks) == 0


def test_distinct_depots_do_not_block_each_other():
    locks = DepotLocks()
    entered = threading.Event()

    def other_depot() -> None:
        with locks.hold("D2"):
            entered.set()

    with locks.hold("D1"):
        worker = threading.Thread(target=other_depot)
        worker.start()
        assert entered.wait(timeout=5)
        worker.join(timeout=5)
