import time
from typing import Callable, Iterable, Optional

from retriever.core.dispatcher import Dispatcher
from retriever.core.errors import RetrieverError
from retriever.core.job import BatchReport, FetchJob, JobOutcome, JobStatus
from retriever.core.sink import FileSink
from retriever.utils.logger import setup_logger

class BatchDriver:
    """
    Runs fetch jobs one at a time with a fixed pause between them.
    
    Fail-fast: the first fatal error (unknown chain, transport, decode, I/O,
    invalid output path) stops the batch and is re-raised. Outcomes of
    finished jobs stay in `report`.
    """
    
    def __init__(self, dispatcher: Dispatcher, sink: FileSink, delay: float = 0.2,
                 sleep: Callable[[float], None] = time.sleep):
        self.dispatcher = dispatcher
        self.sink = sink
        self.delay = delay
        self.sleep = sleep
        self.logger = setup_logger('retriever.batch')
        self.report: Optional[BatchReport] = None
    
    def run_job(self, job: FetchJob) -> JobOutcome:
        files = self.dispatcher.fetch(job.address, job.chain)
        if not files:
            self.logger.info(f"No source files found for {job.address} on {job.chain}")
            return JobOutcome(job, JobStatus.EMPTY)
        
        written = [str(self.sink.save(f)) for f in files]
        return JobOutcome(job, JobStatus.SAVED, files=written,
                          partial_files=sum(1 for f in files if f.is_partial))
    
    def run(self, jobs: Iterable[FetchJob]) -> BatchReport:
        jobs = list(jobs)
        total = len(jobs)
        self.report = BatchReport(total=total)
        self.logger.info(f"Starting batch fetch: {total} contracts")
        
        for i, job in enumerate(jobs, 1):
            self.logger.info(f"[{i}/{total}] {job.address} ({job.chain})")
            try:
                outcome = self.run_job(job)
            except (RetrieverError, OSError, ValueError) as e:
                self.report.error = e.to_dict() if isinstance(e, RetrieverError) else {
                    'error_type': e.__class__.__name__, 'message': str(e),
                    'chain': job.chain, 'address': job.address,
                }
                self.logger.error(f"Aborting batch at job {i}/{total}: {e}")
                raise
            self.report.outcomes.append(outcome)
            
            # rate limiting (except for last contract)
            if i < total:
                self.sleep(self.delay)
        
        self._log_summary()
        return self.report
    
    def _log_summary(self):
        report = self.report
        self.logger.info(
            f"Batch complete: {report.count(JobStatus.SAVED)} saved, "
            f"{report.count(JobStatus.EMPTY)} empty, {report.total} total"
        )
