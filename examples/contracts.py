"""Example contracts for ``callorder``.

Run them with::

    python -m callorder run examples/suite.yaml
    python -m callorder inspect examples.contracts:send_contract --detail
"""

from __future__ import annotations

from callorder import Contract, action, raises, rejects, resolves, returns

# Shared outcome producers; templates refer to them by identity.
connected = resolves("conn", name="connected")
refused = rejects(ConnectionRefusedError, name="refused")
sent = resolves(name="sent")
dropped = rejects(ConnectionResetError, name="dropped")
closed = returns(name="closed")

connect = action("connect", connected, refused)
send = action("send", sent, dropped)
close = action("close", closed)


async def send_then_close(connect, send, close):
    """Connect, send once, and always close an opened connection."""
    await connect()
    try:
        await send()
    finally:
        close()


send_contract = Contract(
    name="send-then-close",
    actions=[connect, send, close],
    valid_sequences=[
        [[connect, connected], [send], [close]],
        [[connect, refused]],
    ],
    pattern=send_then_close,
    description="A connection that was opened must be closed, whatever send does.",
)


loaded = returns({"id": 1}, name="loaded")
missing = raises(KeyError("id"), name="missing")
cached = returns(name="cached")

load = action("load", loaded, missing)
cache = action("cache", cached)


def load_and_cache(load, cache):
    """Caches the record even when loading failed, which the contract forbids."""
    try:
        load()
    except KeyError:
        pass
    cache()


def make_cache_contract() -> Contract:
    return Contract(
        name="load-and-cache",
        actions=[load, cache],
        valid_sequences=[
            [[load, loaded], [cache]],
            [[load, missing]],
        ],
        pattern=load_and_cache,
    )
