import threading

from moodcode.core.challenge_store import ChallengeStore

FIFTEEN_MIN = 15 * 60


class TestConsume:
    def test_one_shot(self, store):
        store.put("s1", "verifier", "challenge")
        record = store.consume("s1")
        assert record is not None
        assert record.verifier == "verifier"
        assert record.challenge == "challenge"
        assert store.consume("s1") is None

    def test_unknown_state(self, store):
        assert store.consume("missing") is None

    def test_found_just_before_expiry(self, store, clock):
        store.put("s1", "v", "c")
        clock.advance(FIFTEEN_MIN - 1)
        assert store.consume("s1") is not None

    def test_not_found_just_after_expiry(self, store, clock):
        store.put("s1", "v", "c")
        clock.advance(FIFTEEN_MIN + 1)
        assert store.consume("s1") is None
        assert len(store) == 0


class TestEvictExpired:
    def test_removes_only_old_records(self, store, clock):
        store.put("old", "v", "c")
        clock.advance(10 * 60)
        store.put("fresh", "v", "c")
        clock.advance(6 * 60)

        assert store.evict_expired() == 1
        assert store.consume("old") is None
        assert store.consume("fresh") is not None

    def test_explicit_now(self, store, clock):
        store.put("s1", "v", "c")
        assert store.evict_expired(now=clock.now + FIFTEEN_MIN - 1) == 0
        assert store.evict_expired(now=clock.now + FIFTEEN_MIN + 1) == 1
        assert len(store) == 0


class TestConcurrency:
    def test_each_state_consumed_once(self):
        store = ChallengeStore()
        states = [f"state-{i}" for i in range(200)]
        for s in states:
            store.put(s, "v", "c")

        hits = []
        lock = threading.Lock()

        def worker():
            for s in states:
                if store.consume(s) is not None:
                    with lock:
                        hits.append(s)
                store.evict_expired()

        threads = [threading.Thread(target=worker) for _ in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert sorted(hits) == sorted(states)
        assert len(store) == 0
