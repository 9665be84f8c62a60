"""
Service context extraction for logging.

Identifies the running process in log lines so that output from several
workers behind one load balancer can be told apart.
"""

import os
from functools import lru_cache


@lru_cache(maxsize=1)
def get_service_context() -> str:
    service_name = os.getenv('SERVICE_NAME', 'restaurant-reservation')
    deploy_env = os.getenv('DEPLOY_ENV', 'local_dev')

    # Container runtimes usually expose a short hostname; fall back to PID locally
    instance = os.getenv('HOSTNAME', '')[:12] or str(os.getpid())

    return f'{service_name}@{deploy_env}:{instance}'
