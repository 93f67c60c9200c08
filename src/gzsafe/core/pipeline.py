# src/gzsafe/core/pipeline.py
from __future__ import annotations
import asyncio

DEFAULT_CHUNK_SIZE = 64 * 1024
DEFAULT_DEPTH = 4

_EOF = b""

async def pipe(source, transform, sink, chunk_size: int = DEFAULT_CHUNK_SIZE, depth: int = DEFAULT_DEPTH) -> int:
    """
    source -> transform -> sink, trzy etapy na jednej pętli asyncio.

    source: obiekt z `async read(n) -> bytes` (b"" = koniec),
    transform: `update(bytes)` i `finalize()` zwracające iterowalne kawałki bytes,
    sink: `async write(bytes)` + `async flush()`.

    Etapy łączą kolejki o rozmiarze `depth` - pełna kolejka wstrzymuje etap wyżej (backpressure).
    Kolejka liczy elementy, nie bajty: rozmiar pojedynczego kawałka ogranicza transform.
    Zwraca liczbę zapisanych bajtów. Pierwszy błąd (w kolejności etapów) jest rzucany dalej
    bez opakowywania, pozostałe etapy są anulowane.
    """
    if chunk_size <= 0 or depth <= 0:
        raise ValueError("chunk_size and depth must be positive")

    raw: asyncio.Queue[bytes] = asyncio.Queue(maxsize=depth)
    converted: asyncio.Queue[bytes] = asyncio.Queue(maxsize=depth)
    written = 0

    async def read_stage():
        while True:
            chunk = await source.read(chunk_size)
            await raw.put(chunk)
            if not chunk:
                return

    async def transform_stage():
        while True:
            chunk = await raw.get()
            pieces = transform.update(chunk) if chunk else transform.finalize()
            for data in pieces:
                if data:
                    await converted.put(data)
            if not chunk:
                await converted.put(_EOF)
                return

    async def write_stage():
        nonlocal written
        while True:
            data = await converted.get()
            if not data:
                break
            await sink.write(data)
            written += len(data)
        await sink.flush()

    tasks = [
        asyncio.create_task(read_stage(), name="gzsafe-read"),
        asyncio.create_task(transform_stage(), name="gzsafe-transform"),
        asyncio.create_task(write_stage(), name="gzsafe-write"),
    ]
    try:
        done, pending = await asyncio.wait(tasks, return_when=asyncio.FIRST_EXCEPTION)
    except BaseException:
        # anulowanie z zewnątrz: sprzątamy etapy i przekazujemy dalej
        for t in tasks:
            t.cancel()
        await asyncio.gather(*tasks, return_exceptions=True)
        raise

    failed = next((t for t in tasks if t in done and not t.cancelled() and t.exception() is not None), None)
    if failed is None:
        return written

    for t in pending:
        t.cancel()
    await asyncio.gather(*pending, return_exceptions=True)
    raise failed.exception()
