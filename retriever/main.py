#!/usr/bin/env python3
"""Smart Contract Source Code Retriever CLI"""

import argparse
import sys
from pathlib import Path
from typing import List

from dotenv import find_dotenv, load_dotenv

from retriever.config import Config
from retriever.core.batch import BatchDriver
from retriever.core.chains import ChainRegistry
from retriever.core.dispatcher import Dispatcher
from retriever.core.errors import RetrieverError
from retriever.core.job import FetchJob
from retriever.core.sink import FileSink
from retriever.utils.jobs_file import read_jobs
from retriever.utils.logger import setup_logger

__version__ = '0.4.0'

def parse_args(argv=None):
    parser = argparse.ArgumentParser(
        prog='contract-retriever',
        description='Retrieve smart contract source code from various chains'
    )
    parser.add_argument('--version', action='version', version=f'%(prog)s {__version__}')
    
    parser.add_argument('--address', '-d', help='Contract address (required in single mode)')
    parser.add_argument('--chain', '-c', help='Chain symbol (required in single mode)')
    parser.add_argument('--file', '-f', help='CSV file of address,chain rows (batch mode). e.g. 0x0,eth')
    parser.add_argument('--output', '-o', default=None,
                       help=f'Output directory (default: {Config.OUTPUT_DIR})')
    parser.add_argument('--list', '-l', action='store_true', help='List all supported chains')
    parser.add_argument('--delay', type=float, default=None,
                       help=f'Seconds to wait between batch jobs (default: {Config.REQUEST_DELAY})')
    parser.add_argument('--summary', help='Write a JSON batch report to this path')
    
    return parser.parse_args(argv)

def list_chains(registry: ChainRegistry) -> List[str]:
    lines = ["Available chains:"]
    for chain in registry.items():
        lines.append(f"{chain.symbol}: {chain.chain_id}")
    return lines

def get_jobs(args) -> List[FetchJob]:
    """Get jobs from CLI args"""
    if args.file:
        return list(read_jobs(Path(args.file)))
    if args.address and args.chain:
        return [FetchJob(address=args.address, chain=args.chain)]
    return []

def main(argv=None):
    load_dotenv(find_dotenv(usecwd=True))
    Config.reload()
    args = parse_args(argv)
    logger = setup_logger('retriever.cli')
    
    registry = ChainRegistry()
    
    if args.list:
        print("\n".join(list_chains(registry)))
        return 0
    
    try:
        jobs = get_jobs(args)
    except (OSError, ValueError) as e:
        logger.error(str(e))
        return 1
    if not jobs:
        print("Invalid arguments. Use --help for usage instructions.")
        return 2
    
    dispatcher = Dispatcher(registry, api_keys=Config.api_keys(), timeout=Config.REQUEST_TIMEOUT)
    sink = FileSink(Path(args.output) if args.output else Config.OUTPUT_DIR)
    delay = args.delay if args.delay is not None else Config.REQUEST_DELAY
    driver = BatchDriver(dispatcher, sink, delay=delay)
    
    try:
        driver.run(jobs)
        status = 0
    except (RetrieverError, OSError, ValueError) as e:
        logger.error(f"error: {e}")
        status = 1
    finally:
        if args.summary and driver.report is not None:
            driver.report.save(Path(args.summary))
            logger.info(f"full summary saved to: {args.summary}")
    
    return status

if __name__ == '__main__':
    sys.exit(main())
