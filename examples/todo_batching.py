import asyncio
import logging

from batched_dispatch import BatchedStore, batch_action

LOG_LEVEL = logging.DEBUG
THROTTLE_SECONDS = 0.1

logging.basicConfig(level=LOG_LEVEL, format="%(name)s %(levelname)s %(message)s")


# A tiny container: a reducer over a list of todos.
class TodoContainer:
    def __init__(self):
        self._state = []

    def dispatch(self, action):
        if action["type"] == "ADD_TODO":
            self._state = [*self._state, {"id": len(self._state) + 1, "text": action["text"]}]
        return action

    def subscribe(self, listener):
        return lambda: None

    def get_state(self):
        return self._state

    def replace_reducer(self, reducer):
        pass


def add_todo(text):
    return {"type": "ADD_TODO", "text": text}


# A trailing-edge throttle on the running event loop. The store only hands it
# a flush callable; when to call it is the limiter's business.
def asyncio_throttle(seconds):
    def factory(flush):
        loop = asyncio.get_running_loop()
        handle = None

        def on_timeout():
            nonlocal handle
            handle = None
            flush()

        def gated(action):
            nonlocal handle
            if handle is None:
                handle = loop.call_later(seconds, on_timeout)

        return gated

    return factory


async def main():
    store = BatchedStore(
        TodoContainer(), channels={"throttle": asyncio_throttle(THROTTLE_SECONDS)}
    )
    store.subscribe(lambda: print(f"Listener sees {len(store.get_state())} todos"))

    # ------------------------------------------------------------------------------------------------

    print()
    print("=" * 100)
    print("Dispatching a batch")
    print("-" * 100)
    print()

    # One listener call for both todos.
    store.dispatch([add_todo("Hello"), add_todo("World")])

    # ------------------------------------------------------------------------------------------------

    print()
    print("=" * 100)
    print("Dispatching through a throttled channel")
    print("-" * 100)
    print()

    for text in ("Rate", "Limited", "Dispatch"):
        store.dispatch(add_todo(text), "throttle")
    print(f"Queued: {store.get_action_queue('throttle')}")

    await asyncio.sleep(THROTTLE_SECONDS * 2)

    # ------------------------------------------------------------------------------------------------

    print()
    print("=" * 100)
    print("Discarding stale actions")
    print("-" * 100)
    print()

    store.dispatch(batch_action([add_todo("Stale"), add_todo("Also stale")], "throttle"))
    store.clear_action_queue("throttle")

    # The throttle still fires, but finds nothing to flush.
    await asyncio.sleep(THROTTLE_SECONDS * 2)
    print(store.get_state())


if __name__ == "__main__":
    asyncio.run(main())
