"""
Modelo de topología del cluster.
Asignación de nodos a réplicas y a particiones del log transaccional.
"""
from topology.errors import (
    TopologyError,
    NodeNotFoundError,
    DuplicateNodeError,
    UnknownOperationError,
    InvalidTopologyError,
    InvalidOperationError,
    StaleOperationError
)
from topology.result import Result
from topology.topology_store import (
    NodeState,
    NodeRecord,
    Topology,
    replica_name,
    build_topology
)
from topology.node_access import get_node, assoc_node, update_node
from topology.replica_view import replicas, replica_of, nodes_by_replica, only_active
from topology.log_view import log_parts, smallest_log_part, log_configuration

__all__ = [
    "TopologyError",
    "NodeNotFoundError",
    "DuplicateNodeError",
    "UnknownOperationError",
    "InvalidTopologyError",
    "InvalidOperationError",
    "StaleOperationError",
    "Result",
    "NodeState",
    "NodeRecord",
    "Topology",
    "replica_name",
    "build_topology",
    "get_node",
    "assoc_node",
    "update_node",
    "replicas",
    "replica_of",
    "nodes_by_replica",
    "only_active",
    "log_parts",
    "smallest_log_part",
    "log_configuration",
]
