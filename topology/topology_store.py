"""
Valor inmutable de topología: asignación de nodos a réplicas y particiones del log.
"""
import logging
from enum import Enum
from dataclasses import dataclass, field, replace
from typing import Dict, Iterable, Optional, Tuple, Any

from topology.errors import InvalidTopologyError

logger = logging.getLogger(__name__)

REPLICA_NAME_PREFIX = "replica-"


class NodeState(Enum):
    """Estados de un nodo dentro de la topología."""
    ACTIVE = "active"
    REMOVING = "removing"


@dataclass(frozen=True)
class NodeRecord:
    """Registro de un nodo en la topología."""
    node: str
    replica: str
    state: NodeState = NodeState.ACTIVE
    
    # None si el nodo no participa en el log
    log_part: Optional[int] = None
    
    @property
    def is_active(self) -> bool:
        return self.state is NodeState.ACTIVE
    
    @property
    def in_log(self) -> bool:
        return self.log_part is not None
    
    def with_changes(self, **changes) -> "NodeRecord":
        """Retorna una copia del registro con los campos indicados cambiados."""
        return replace(self, **changes)
    
    def to_dict(self) -> Dict[str, Any]:
        """Serializa a diccionario."""
        data = {
            "node": self.node,
            "state": self.state.value,
            "replica": self.replica,
        }
        if self.log_part is not None:
            data["log_part"] = self.log_part
        return data
    
    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "NodeRecord":
        """Crea desde diccionario."""
        return cls(
            node=data["node"],
            replica=data["replica"],
            state=NodeState(data.get("state", NodeState.ACTIVE.value)),
            log_part=data.get("log_part")
        )


@dataclass(frozen=True)
class Topology:
    """
    Topología completa del cluster en un instante (especulativo).
    
    Es un valor: ninguna función la modifica, todas retornan una nueva.
    """
    replica_count: int
    nodes: Tuple[NodeRecord, ...] = field(default_factory=tuple)
    
    def __post_init__(self):
        """Validación de invariantes."""
        if self.replica_count < 1:
            raise InvalidTopologyError(
                f"replica_count ({self.replica_count}) debe ser >= 1",
                field="replica_count"
            )
        
        # Aceptamos cualquier iterable, pero guardamos una tupla
        if not isinstance(self.nodes, tuple):
            object.__setattr__(self, "nodes", tuple(self.nodes))
        
        names = [record.node for record in self.nodes]
        if len(names) != len(set(names)):
            raise InvalidTopologyError(
                "Los identificadores de nodo deben ser únicos",
                field="nodes"
            )
        
        valid_replicas = {replica_name(n) for n in range(self.replica_count)}
        for record in self.nodes:
            if record.replica not in valid_replicas:
                raise InvalidTopologyError(
                    f"Nodo '{record.node}': réplica desconocida '{record.replica}'",
                    field="replica"
                )
            
            if record.log_part is not None and record.log_part < 0:
                raise InvalidTopologyError(
                    f"Nodo '{record.node}': log_part ({record.log_part}) debe ser >= 0",
                    field="log_part"
                )
    
    @property
    def node_names(self) -> Tuple[str, ...]:
        """Identificadores de todos los nodos, en orden."""
        return tuple(record.node for record in self.nodes)
    
    def with_nodes(self, nodes: Iterable[NodeRecord]) -> "Topology":
        """Retorna una topología con la misma cantidad de réplicas y otros nodos."""
        return Topology(replica_count=self.replica_count, nodes=tuple(nodes))
    
    def to_dict(self) -> Dict[str, Any]:
        """Serializa a diccionario."""
        return {
            "replica_count": self.replica_count,
            "nodes": [record.to_dict() for record in self.nodes]
        }
    
    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Topology":
        """Crea desde diccionario."""
        return cls(
            replica_count=data["replica_count"],
            nodes=tuple(NodeRecord.from_dict(n) for n in data.get("nodes", []))
        )


def replica_name(n: int) -> str:
    """
    Construye el nombre canónico de una réplica.
    
    Args:
        n: Número de réplica
        
    Returns:
        Nombre de la réplica (p.ej. "replica-0")
    """
    return f"{REPLICA_NAME_PREFIX}{n}"


def build_topology(nodes: Iterable[str], replica_count: int) -> Topology:
    """
    Construye la topología inicial de un test.
    
    Los nodos se reparten en réplicas por turnos (i mod r) y las particiones
    iniciales del log se forman con bloques de r nodos consecutivos (i div r):
    
        >>> [i // 3 for i in range(10)]
        [0, 0, 0, 1, 1, 1, 2, 2, 2, 3]
        >>> [i % 3 for i in range(10)]
        [0, 1, 2, 0, 1, 2, 0, 1, 2, 0]
    
    Args:
        nodes: Todos los nodos del cluster, en orden
        replica_count: Número inicial de réplicas
        
    Returns:
        Topología inicial
        
    Raises:
        InvalidTopologyError: Si replica_count < 1 o hay nodos repetidos
    """
    if replica_count < 1:
        raise InvalidTopologyError(
            f"replica_count ({replica_count}) debe ser >= 1",
            field="replica_count"
        )
    
    records = [
        NodeRecord(
            node=node,
            state=NodeState.ACTIVE,
            replica=replica_name(i % replica_count),
            log_part=i // replica_count
        )
        for i, node in enumerate(nodes)
    ]
    
    topology = Topology(replica_count=replica_count, nodes=tuple(records))
    
    logger.info(
        f"Topología inicial: {len(records)} nodos, {replica_count} réplicas"
    )
    
    return topology
