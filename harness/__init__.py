"""
Soporte para el harness de inyección de fallos.
Referencia a la topología actual y nemesis de transiciones.
"""
from harness.topology_ref import TopologyRef
from harness.nemesis import TopologyNemesis

__all__ = [
    "TopologyRef",
    "TopologyNemesis",
]
