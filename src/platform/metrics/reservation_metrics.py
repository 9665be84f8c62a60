from prometheus_client import Counter, Histogram


class ReservationMetrics:
    """
    Booking workflow metrics exposed on /metrics

    `result` is one of: created, not_found, limit_exceeded, out_of_hours, error
    """

    def __init__(self) -> None:
        self.reservation_requests = Counter(
            'reservation_requests_total',
            'Total reservation create requests by outcome',
            ['result'],
        )

        self.reservation_duration = Histogram(
            'reservation_create_duration_seconds',
            'Reservation create processing time',
            buckets=[0.005, 0.01, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0],
        )

        self.auth_rejections = Counter(
            'auth_rejections_total',
            'Requests rejected by the authorization gate',
            ['reason'],  # unauthorized / forbidden
        )

    def record_reservation(self, *, result: str, duration: float) -> None:
        self.reservation_requests.labels(result=result).inc()
        self.reservation_duration.observe(duration)

    def record_auth_rejection(self, *, reason: str) -> None:
        self.auth_rejections.labels(reason=reason).inc()


# Module-level singleton: prometheus collectors register globally once per process
reservation_metrics = ReservationMetrics()
