import threading

from storage import KeyedLocks


def test_order_locks_are_forgotten_after_release():
    locks = KeyedLocks(reentrant=False)

    for i in range(50):
        assert locks.try_hold(f"order-{i}")
        locks.release(f"order-{i}")

    assert len(locks) == 0


def test_non_reentrant_try_hold_rejects_second_holder():
    locks = KeyedLocks(reentrant=False)

    assert locks.try_hold("order-1")
    assert not locks.try_hold("order-1")
    locks.release("order-1")
    assert locks.try_hold("order-1")
    locks.release("order-1")


def test_only_one_thread_holds_a_key_while_others_churn():
    locks = KeyedLocks(reentrant=False)
    holders = []
    inside = threading.Lock()
    overlaps = []
    barrier = threading.Barrier(8)

    def worker():
        barrier.wait()
        for _ in range(200):
            if locks.try_hold("order-1"):
                if not inside.acquire(blocking=False):
                    overlaps.append(True)
                else:
                    holders.append(True)
                    inside.release()
                locks.release("order-1")

    threads = [threading.Thread(target=worker) for _ in range(8)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert holders
    assert not overlaps


def test_reentrant_locks_are_kept_for_repeated_keys():
    locks = KeyedLocks()

    with locks.hold("buyer-1"):
        with locks.hold("buyer-1"):
            pass

    assert len(locks) == 1
