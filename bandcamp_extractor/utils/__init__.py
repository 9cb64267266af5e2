"""
Utility functions for bandcamp-extractor.

    - run_in_parallel: Thread pool with tqdm progress and per-item error capture
"""

from concurrent.futures import ThreadPoolExecutor, as_completed
from typing import Callable, Iterable, TypeVar

from tqdm import tqdm

# Type variables for generic parallel processing
T = TypeVar("T")
R = TypeVar("R")


def run_in_parallel(
    func: Callable[[T], R],
    items: Iterable[T],
    num_threads: int = 4,
    description: str = "Processing",
    show_progress: bool = True
) -> list[tuple[T, R | Exception]]:
    """
    Run a function on multiple items in parallel with progress tracking.

    Args:
        func: Function to call for each item. Takes one argument.
        items: Iterable of items to process.
        num_threads: Number of parallel threads.
        description: Description for the progress bar.
        show_progress: Whether to show tqdm progress bar.

    Returns:
        List of (item, result) tuples in the order of `items`, where result
        is either the return value or the Exception the call raised.

    Error Handling:
        Exceptions are caught and returned in the result tuple.
        Processing continues for other items.

    Example:
        results = run_in_parallel(extract, urls, num_threads=4)

        for url, result in results:
            if isinstance(result, Exception):
                print(f"Failed: {url} - {result}")
    """
    items_list = list(items)
    results: dict[int, R | Exception] = {}

    with ThreadPoolExecutor(max_workers=num_threads) as executor:
        future_to_index = {
            executor.submit(func, item): index
            for index, item in enumerate(items_list)
        }

        iterator = as_completed(future_to_index)
        if show_progress:
            iterator = tqdm(
                iterator,
                total=len(items_list),
                desc=description,
                unit="page"
            )

        for future in iterator:
            index = future_to_index[future]
            try:
                results[index] = future.result()
            except Exception as e:
                results[index] = e

    return [(item, results[index]) for index, item in enumerate(items_list)]
