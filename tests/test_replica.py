"""
Tests for the lock-guarded Replica holder.
"""

import threading

import pytest

from crdt import GrowOnlySet
from error_handling import DecodeError, ErrorHandler
from replica import Replica
from serialization import GSetSerializer


class TestReplica:

    def test_insert_and_contains(self):
        replica = Replica("r1")
        replica.insert("a")
        assert replica.contains("a")
        assert not replica.contains("b")
        assert len(replica) == 1

    def test_snapshot_is_independent(self):
        replica = Replica("r1")
        replica.insert(1)
        snapshot = replica.snapshot()
        snapshot.insert(2)
        assert not replica.contains(2)

    def test_state_exchange_converges(self):
        r1, r2 = Replica("r1"), Replica("r2")
        r1.insert(1)
        r1.insert(2)
        r2.insert(2)
        r2.insert(3)

        r1.receive_state(r2.export_state())
        r2.receive_state(r1.export_state())
        # Redelivery changes nothing
        r2.receive_state(r1.export_state())

        assert r1.snapshot() == r2.snapshot() == GrowOnlySet([1, 2, 3])

    def test_merge_own_snapshot(self):
        replica = Replica("r1")
        replica.insert(1)
        replica.merge(replica.snapshot())
        assert replica.snapshot() == GrowOnlySet([1])

    def test_merge_rejects_non_gset(self):
        with pytest.raises(TypeError):
            Replica("r1").merge([1, 2])

    def test_failed_receive_leaves_state_unchanged(self):
        handler = ErrorHandler()
        replica = Replica("r1", error_handler=handler)
        replica.insert(1)

        with pytest.raises(DecodeError):
            replica.receive_state("[2, 3")

        assert replica.snapshot() == GrowOnlySet([1])
        assert handler.error_count['DecodeError'] == 1

    def test_receive_with_element_decoder_failure(self):
        serializer = GSetSerializer(element_decoder=lambda item: (item[0], item[1]))
        replica = Replica("r1", serializer=serializer)
        replica.insert(("node-a", 1))

        with pytest.raises(DecodeError):
            replica.receive_state('[["node-b"]]')

        assert replica.snapshot() == GrowOnlySet([("node-a", 1)])

    def test_concurrent_inserts(self):
        replica = Replica("shared")
        per_thread = 200

        def worker(offset):
            for i in range(per_thread):
                replica.insert(offset * per_thread + i)

        threads = [threading.Thread(target=worker, args=(n,)) for n in range(8)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert len(replica) == 8 * per_thread
        assert replica.snapshot() == GrowOnlySet(range(8 * per_thread))
