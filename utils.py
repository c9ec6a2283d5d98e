"""
Utilidades comunes para DistriTopo.
"""
import json
from typing import Any, Dict, List

from topology.log_view import log_configuration
from topology.replica_view import nodes_by_replica
from topology.topology_store import NodeState, Topology


def pretty_print_json(data: Dict[str, Any]) -> str:
    """
    Formatea JSON para impresión legible.
    
    Args:
        data: Diccionario a formatear
    
    Returns:
        String JSON formateado
    """
    return json.dumps(data, indent=2, ensure_ascii=False)


def topology_summary(topology: Topology) -> Dict[str, Any]:
    """
    Resume una topología para logs y reportes.
    
    Args:
        topology: Topología a resumir
    
    Returns:
        Diccionario con estadísticas
    """
    removing = [r.node for r in topology.nodes if r.state is NodeState.REMOVING]
    
    return {
        'replica_count': topology.replica_count,
        'total_nodes': len(topology.nodes),
        'active_nodes': len(topology.nodes) - len(removing),
        'removing_nodes': removing,
        'replicas': {
            replica: sorted(nodes)
            for replica, nodes in sorted(nodes_by_replica(topology).items())
        },
        'log_configuration': log_configuration(topology),
    }


def render_topology(topology: Topology) -> str:
    """
    Crea una tabla ASCII con los nodos de la topología.
    
    Args:
        topology: Topología a mostrar
    
    Returns:
        String con la tabla
    """
    lines: List[str] = []
    lines.append(f"{'nodo':<12} {'estado':<10} {'réplica':<12} log")
    lines.append("-" * 40)
    
    for record in topology.nodes:
        log_part = "-" if record.log_part is None else str(record.log_part)
        lines.append(
            f"{record.node:<12} {record.state.value:<10} {record.replica:<12} {log_part}"
        )
    
    return "\n".join(lines)
