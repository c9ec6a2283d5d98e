"""
Configuración del sistema DistriTopo.
"""
import logging
import sys
from dataclasses import dataclass, field
from typing import List, Optional

import yaml

# Configuración de la topología
REPLICA_COUNT = 3  # Réplicas iniciales por defecto

# Configuración del simulador
DEFAULT_NODES = ["n1", "n2", "n3", "n4", "n5", "n6", "n7", "n8", "n9", "n10"]
SIMULATION_STEPS = 20
SIMULATION_WORKERS = 3
SIMULATED_LATENCY_MS = 10  # Latencia de la acción "real" sobre el cluster

# Configuración de logging
LOG_LEVEL = "INFO"  # DEBUG, INFO, WARNING, ERROR


def setup_logging(level: str = LOG_LEVEL):
    """Configura logging con soporte UTF-8."""
    handler = logging.StreamHandler(sys.stdout)
    
    # Intentar configurar UTF-8, con fallback al encoding por defecto
    try:
        if hasattr(handler.stream, 'reconfigure'):
            handler.stream.reconfigure(encoding='utf-8', errors='replace')
    except (AttributeError, OSError, ValueError):
        pass
    
    handler.setFormatter(
        logging.Formatter('%(asctime)s - %(name)s - %(levelname)s - %(message)s')
    )
    
    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    root_logger.handlers.clear()
    root_logger.addHandler(handler)


@dataclass
class HarnessConfig:
    """Configuración de una corrida del harness."""
    
    nodes: List[str] = field(default_factory=lambda: list(DEFAULT_NODES))
    replicas: int = REPLICA_COUNT
    steps: int = SIMULATION_STEPS
    workers: int = SIMULATION_WORKERS
    latency_ms: int = SIMULATED_LATENCY_MS
    seed: Optional[int] = None
    
    def __post_init__(self):
        """Validación de configuración."""
        if self.replicas < 1:
            raise ValueError(f"replicas ({self.replicas}) debe ser >= 1")
        
        if not self.nodes:
            raise ValueError("nodes no puede estar vacío")
        
        if len(set(self.nodes)) != len(self.nodes):
            raise ValueError("nodes no puede tener nodos repetidos")
        
        if self.steps < 0:
            raise ValueError(f"steps ({self.steps}) debe ser >= 0")
        
        if self.workers < 1:
            raise ValueError(f"workers ({self.workers}) debe ser >= 1")
        
        if self.latency_ms < 0:
            raise ValueError(f"latency_ms ({self.latency_ms}) debe ser >= 0")


def load_harness_config(path: str) -> HarnessConfig:
    """
    Carga la configuración del harness desde un archivo YAML.
    
    Las claves ausentes toman los valores por defecto de este módulo.
    
    Args:
        path: Ruta del archivo YAML
        
    Returns:
        HarnessConfig validada

    Raises:
        ValueError: Si el YAML es inválido o la configuración no valida
    """
    with open(path, 'r', encoding='utf-8') as f:
        try:
            data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ValueError(f"{path}: YAML inválido: {e}")
    
    if not isinstance(data, dict):
        raise ValueError(f"{path}: se esperaba un mapa de configuración")
    
    known = set(HarnessConfig.__dataclass_fields__)
    unknown = set(data) - known
    if unknown:
        raise ValueError(f"{path}: claves desconocidas {sorted(unknown)}")
    
    if "nodes" in data:
        data["nodes"] = [str(node) for node in data["nodes"]]
    
    return HarnessConfig(**data)
