"""
Métricas Prometheus para el modelo de topología.
"""
from prometheus_client import Counter, Gauge, generate_latest, REGISTRY
from collections import Counter as Frequencies
from functools import wraps
from typing import Iterable
import logging

from topology.log_view import log_configuration
from topology.topology_store import NodeState, Topology
from transitions.operations import OperationKind

logger = logging.getLogger(__name__)


# Definir métricas
topology_transitions = Counter(
    'distritopo_transitions_total',
    'Transiciones aplicadas al modelo de topología',
    ['kind', 'outcome']
)

topology_nodes = Gauge(
    'distritopo_topology_nodes',
    'Nodos en la topología actual',
    ['state']
)

log_partition_size = Gauge(
    'distritopo_log_partition_size',
    'Nodos en cada partición del log',
    ['partition']
)

candidate_operations = Gauge(
    'distritopo_candidate_operations',
    'Operaciones legales en la última enumeración',
    ['kind']
)


def track_transition_metrics(func):
    """Decorator para contar transiciones aplicadas y fallidas."""
    @wraps(func)
    def wrapper(topology, op, *args, **kwargs):
        result = func(topology, op, *args, **kwargs)
        kind = op.kind.value if hasattr(op, "kind") else "unknown"
        outcome = "ok" if result.success else "failed"
        topology_transitions.labels(kind=kind, outcome=outcome).inc()
        return result
    return wrapper


def observe_topology(topology: Topology):
    """Actualiza los gauges de nodos y particiones para una topología."""
    states = Frequencies(record.state for record in topology.nodes)
    for state in NodeState:
        topology_nodes.labels(state=state.value).set(states[state])
    
    # Las particiones pueden desaparecer entre observaciones
    log_partition_size.clear()
    for part, members in enumerate(log_configuration(topology)):
        log_partition_size.labels(partition=str(part)).set(len(members))


def observe_operations(operations: Iterable):
    """Actualiza el gauge de operaciones legales por tipo."""
    kinds = Frequencies(op.kind for op in operations)
    for kind in OperationKind:
        candidate_operations.labels(kind=kind.value).set(kinds[kind])


def export_metrics() -> bytes:
    """Exporta métricas en formato Prometheus."""
    return generate_latest(REGISTRY)
