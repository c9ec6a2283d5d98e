"""
Consultas sobre las particiones del log transaccional.
"""
from collections import Counter
from typing import Dict, List

from topology.topology_store import Topology


def log_parts(topology: Topology) -> List[int]:
    """
    Todas las particiones del log de la topología.
    
    Las particiones son densas: van de 0 a la mayor observada, aunque alguna
    haya quedado vacía. Sin particiones asignadas, retorna [0].
    
    Returns:
        Lista [0, 1, ..., max_log_part]
    """
    max_part = max(
        (record.log_part for record in topology.nodes if record.in_log),
        default=0
    )
    return list(range(max_part + 1))


def smallest_log_part(topology: Topology) -> int:
    """
    Partición del log con menos miembros.
    
    Los empates se resuelven a favor de la partición de menor número.
    """
    sizes = Counter(
        record.log_part for record in topology.nodes if record.in_log
    )
    # min() retorna el primero de los empatados
    return min(log_parts(topology), key=lambda part: sizes[part])


def log_configuration(topology: Topology) -> List[List[str]]:
    """
    Configuración del log transaccional para la topología.
    
    Es lo que se envía al cluster real para reconfigurar los miembros del log.
    
    Returns:
        Lista de particiones; cada partición es la lista de sus nodos
    """
    grouped: Dict[int, List[str]] = {}
    
    for record in topology.nodes:
        if record.in_log:
            grouped.setdefault(record.log_part, []).append(record.node)
    
    return [grouped.get(part, []) for part in log_parts(topology)]
