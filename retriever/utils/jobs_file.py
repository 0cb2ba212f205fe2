import csv
from pathlib import Path
from typing import Iterator

from retriever.core.job import FetchJob

def read_jobs(path: Path) -> Iterator[FetchJob]:
    """
    Read batch jobs from a CSV file: address in column 0, chain in column 1.
    A leading header row (first cell not 0x-prefixed) is skipped.
    """
    with open(path, newline='', encoding='utf-8') as f:
        reader = csv.reader(f)
        for line_no, row in enumerate(reader, 1):
            cells = [c.strip() for c in row]
            if not any(cells):
                continue
            if line_no == 1 and not cells[0].lower().startswith('0x'):
                continue
            if len(cells) < 2 or not cells[0] or not cells[1]:
                raise ValueError(f"Invalid CSV file {path}: line {line_no} needs address,chain")
            yield FetchJob(address=cells[0], chain=cells[1])
