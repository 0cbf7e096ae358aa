import asyncio
import time

from embedder.infrastructure.clients import build_service_client
from embedder.settings import settings

RUNS = 5

PAYLOADS = [
    (
        "Short text, 256 dims",
        "ONNX Runtime on a single core is fast",
        256,
    ),
    (
        "Medium text, 256 dims",
        "A quantized transformer served from one process provides good performance "
        "for retrieval workloads. Tokenization, a single forward pass, mean pooling "
        "and normalization are all that happen per request. This text is designed to "
        "test medium-length input processing and tokenization performance.",
        256,
    ),
    (
        "Long text, 768 dims",
        "Matryoshka representation learning allows flexible embedding dimensions, "
        "supporting 128, 256, 512, and 768-dimensional vectors from a single model. "
        "The quantized model reduces memory footprint while maintaining high accuracy. "
        "Mean pooling over token embeddings creates document-level representations. "
        "L2 normalization enables efficient cosine similarity computation through dot "
        "products. This longer text tests the service's ability to handle more complex "
        "tokenization and inference scenarios with hundreds of tokens. " * 2,
        768,
    ),
]


async def run_benchmark():
    client = build_service_client(settings)
    print("=========================================")
    print(f"Embedding Service Simple Benchmark ({settings.service_url})")
    print("=========================================")

    for name, text, size in PAYLOADS:
        print(f"Testing: {name}")
        print(f"  Running {RUNS} iterations...")
        timings = []
        for i in range(1, RUNS + 1):
            start = time.perf_counter()
            try:
                vector = await client.embed(text, size=size)
            except Exception as e:
                print(f"    Run {i}: failed ({e})")
                continue
            duration_ms = (time.perf_counter() - start) * 1000
            timings.append(duration_ms)
            print(f"    Run {i}: {duration_ms:.0f}ms ({len(vector)} dims)")

        if timings:
            print(f"  Average: {sum(timings) / len(timings):.0f}ms")
        else:
            print("  Average: n/a (all runs failed)")
        print()

    print("=========================================")
    print("Benchmark Complete!")
    print("=========================================")


if __name__ == "__main__":
    asyncio.run(run_benchmark())
