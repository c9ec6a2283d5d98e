"""
Simulador: ejecuta una secuencia de transiciones de topología contra el modelo.

Varios workers concurrentes eligen operaciones legales, "ejecutan" la acción
real (una espera que simula la latencia del cluster) y avanzan la topología
compartida. No hay cluster real: sirve para ver la proyección evolucionar.
"""
import asyncio
import logging
import random
import sys
from typing import List, Optional
import argparse

from config import HarnessConfig, load_harness_config, setup_logging
from harness.nemesis import TopologyNemesis
from harness.topology_ref import TopologyRef
from topology.topology_store import Topology, build_topology
from transitions.operations import RemoveLogNode, RemoveNode
from utils import pretty_print_json, render_topology, topology_summary

logger = logging.getLogger(__name__)


class Simulator:
    """Simulador de transiciones de topología."""

    def __init__(self, config: HarnessConfig):
        """
        Inicializa el simulador.

        Args:
            config: Configuración de la corrida
        """
        self.config = config
        self.rng = random.Random(config.seed)

        self.ref = TopologyRef(build_topology(config.nodes, config.replicas))
        self.nemesis = TopologyNemesis(self.ref, config.nodes, rng=self.rng)

        self.remaining = config.steps
        self.applied = 0
        self.discarded = 0

    async def worker(self, worker_id: int):
        """Ciclo de un worker: elegir, ejecutar, registrar."""
        while self.remaining > 0:
            self.remaining -= 1

            op = self.nemesis.choose()
            if op is None:
                logger.info(f"Worker {worker_id}: sin operaciones legales, termina")
                return

            # Las bajas necesitan la configuración del log futura
            if isinstance(op, (RemoveLogNode, RemoveNode)):
                pending = self.nemesis.pending_log_configuration(op)
                if pending.success:
                    logger.debug(
                        f"Worker {worker_id}: configuración del log a enviar "
                        f"{pending.value}"
                    )

            logger.info(f"Worker {worker_id}: {op.kind.value} {op.node}")
            await asyncio.sleep(self.config.latency_ms / 1000)

            result = self.nemesis.record(op)
            if result.success:
                self.applied += 1
            else:
                self.discarded += 1

    async def run(self) -> Topology:
        """
        Ejecuta todos los workers hasta agotar los pasos.

        Returns:
            Topología final
        """
        logger.info(
            f"Simulando {self.config.steps} pasos con {self.config.workers} workers "
            f"sobre {len(self.config.nodes)} nodos"
        )

        await asyncio.gather(*[
            self.worker(i) for i in range(self.config.workers)
        ])

        logger.info(
            f"OK Simulación terminada: {self.applied} aplicadas, "
            f"{self.discarded} descartadas (versión {self.ref.version})"
        )

        return self.ref.deref()


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description='Simulador de topología de cluster')
    parser.add_argument('--config', help='Archivo YAML de configuración')
    parser.add_argument('--nodes', help='Nodos separados por coma (p.ej. a,b,c)')
    parser.add_argument('--replicas', type=int, help='Número de réplicas')
    parser.add_argument('--steps', type=int, help='Número de transiciones a intentar')
    parser.add_argument('--workers', type=int, help='Workers concurrentes')
    parser.add_argument('--seed', type=int, help='Semilla aleatoria')
    parser.add_argument('--debug', action='store_true', help='Activar logging DEBUG')

    return parser.parse_args(argv)


def build_config(args: argparse.Namespace) -> HarnessConfig:
    """Combina el archivo YAML (si hay) con las opciones de línea de comandos."""
    config = load_harness_config(args.config) if args.config else HarnessConfig()

    overrides = {}
    if args.nodes:
        overrides["nodes"] = [n.strip() for n in args.nodes.split(",") if n.strip()]
    for name in ("replicas", "steps", "workers", "seed"):
        value = getattr(args, name)
        if value is not None:
            overrides[name] = value

    if not overrides:
        return config

    values = {**config.__dict__, **overrides}
    return HarnessConfig(**values)


async def main(argv: Optional[List[str]] = None) -> int:
    """Función principal."""
    args = parse_args(argv)

    setup_logging("DEBUG" if args.debug else "INFO")

    try:
        config = build_config(args)
    except (OSError, ValueError) as e:
        logger.error(f"Configuración inválida: {e}")
        return 2

    sim = Simulator(config)
    topology = await sim.run()

    print(render_topology(topology))
    print(pretty_print_json(topology_summary(topology)))

    return 0


def cli():
    """Entrada del script instalado."""
    try:
        sys.exit(asyncio.run(main()))
    except KeyboardInterrupt:
        print("\n\nInterrumpido por usuario")


if __name__ == "__main__":
    cli()
