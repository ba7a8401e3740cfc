from prometheus_client import Counter, Histogram


class ReservationMetrics:
    """
    Table Reservation Core Metrics Collector

    Tracks allocation outcomes, commit conflicts against the store
    uniqueness constraint, and cancellations
    """

    def __init__(self):
        # ========== Allocation Metrics ==========
        self.allocation_requests = Counter(
            'table_allocation_requests_total',
            'Total table allocation requests',
            ['policy', 'result'],  # result: committed/no_capacity/slot_full/invalid/conflict
        )

        self.allocation_duration = Histogram(
            'table_allocation_duration_seconds',
            'Table allocation processing time including retries',
            ['policy'],
            buckets=[0.001, 0.005, 0.01, 0.05, 0.1, 0.5, 1.0, 2.0, 5.0],
        )

        self.commit_conflicts = Counter(
            'reservation_commit_conflicts_total',
            'Commit attempts rejected by the store',
            ['reason'],  # reason: slot_table_taken/store_unavailable
        )

        # ========== Cancellation Metrics ==========
        self.cancellations = Counter(
            'reservation_cancellations_total',
            'Total reservation cancellations',
            ['result'],  # result: cancelled/forbidden/not_found
        )

    def record_allocation(self, *, policy: str, result: str, duration: float | None = None) -> None:
        self.allocation_requests.labels(policy=policy, result=result).inc()
        if duration is not None:
            self.allocation_duration.labels(policy=policy).observe(duration)

    def record_commit_conflict(self, *, reason: str) -> None:
        self.commit_conflicts.labels(reason=reason).inc()

    def record_cancellation(self, *, result: str) -> None:
        self.cancellations.labels(result=result).inc()


# Global metrics instance
metrics = ReservationMetrics()
