"""
Tests para la referencia de topología, el nemesis y las métricas.
"""
import random
import threading
import pytest
from prometheus_client import REGISTRY

from harness import TopologyRef, TopologyNemesis
from metrics import export_metrics, observe_topology
from topology import (
    NodeState,
    StaleOperationError,
    build_topology,
    get_node,
    log_configuration,
)
from transitions import AddNode, RemoveLogNode, RemoveNode, apply_op


NODES = ["a", "b", "c", "d", "e", "f", "g", "h", "i", "j"]


@pytest.fixture
def ref():
    """Referencia a la topología inicial de 10 nodos y 3 réplicas."""
    return TopologyRef(build_topology(NODES, 3))


def sample(name, labels):
    return REGISTRY.get_sample_value(name, labels) or 0.0


def test_ref_swap(ref):
    """Test swap avanza la referencia y la versión."""
    result = ref.swap(apply_op, RemoveLogNode(node="a"))
    
    assert result.success
    assert ref.version == 1
    assert ref.deref() is result.value
    assert get_node(ref.deref(), "a").log_part is None


def test_ref_swap_failure_keeps_topology(ref):
    """Test un swap fallido no cambia la referencia."""
    before = ref.deref()
    
    result = ref.swap(apply_op, RemoveNode(node="zz"))
    
    assert not result.success
    assert ref.version == 0
    assert ref.deref() is before


def test_ref_compare_and_set(ref):
    """Test compare_and_set rechaza una lectura vieja."""
    snapshot = ref.deref()
    first = apply_op(snapshot, RemoveLogNode(node="a")).unwrap()
    second = apply_op(snapshot, RemoveLogNode(node="b")).unwrap()
    
    assert ref.compare_and_set(snapshot, first)
    assert not ref.compare_and_set(snapshot, second)
    
    assert ref.deref() is first
    assert ref.version == 1


def test_ref_reset_last_writer_wins(ref):
    """Test sin arbitraje, dos transiciones sobre la misma versión pierden una."""
    snapshot = ref.deref()
    
    ref.reset(apply_op(snapshot, RemoveLogNode(node="a")).unwrap())
    ref.reset(apply_op(snapshot, RemoveLogNode(node="b")).unwrap())
    
    current = ref.deref()
    assert get_node(current, "a").log_part == 0
    assert get_node(current, "b").log_part is None
    assert ref.version == 2


def test_ref_concurrent_swaps(ref):
    """Test swaps concurrentes desde varios threads no pierden transiciones."""
    targets = list("abcdefghi")
    
    threads = [
        threading.Thread(target=ref.swap, args=(apply_op, RemoveLogNode(node=node)))
        for node in targets
    ]
    for t in threads:
        t.start()
    for t in threads:
        t.join()
    
    assert ref.version == len(targets)
    assert log_configuration(ref.deref()) == [[], [], [], ["j"]]


def test_ref_operations(ref):
    """Test operaciones sobre la topología actual."""
    operations = ref.operations(NODES)
    
    assert len(operations) == 9


def test_nemesis_choose_is_legal(ref):
    """Test el nemesis sólo elige operaciones legales."""
    nemesis = TopologyNemesis(ref, NODES, rng=random.Random(5))
    
    op = nemesis.choose()
    
    assert isinstance(op, RemoveLogNode)
    assert op.node in set("abcdefghi")


def test_nemesis_choose_none_when_exhausted():
    """Test sin operaciones legales choose retorna None."""
    ref = TopologyRef(build_topology(["a", "b"], 2))
    nemesis = TopologyNemesis(ref, ["a", "b"])
    
    assert nemesis.choose() is None


def test_nemesis_pending_log_configuration(ref):
    """Test la configuración del log futura no avanza la referencia."""
    nemesis = TopologyNemesis(ref, NODES)
    
    pending = nemesis.pending_log_configuration(RemoveLogNode(node="e"))
    
    assert pending.unwrap() == [["a", "b", "c"], ["d", "f"], ["g", "h", "i"], ["j"]]
    assert ref.version == 0
    assert get_node(ref.deref(), "e").log_part == 1


def test_nemesis_pending_log_configuration_failure(ref):
    """Test la configuración futura propaga el fallo de la transición."""
    nemesis = TopologyNemesis(ref, NODES)
    
    assert not nemesis.pending_log_configuration(RemoveNode(node="zz")).success


def test_nemesis_record(ref):
    """Test registrar una transición avanza el modelo y el historial."""
    nemesis = TopologyNemesis(ref, NODES + ["k"], rng=random.Random(2))
    
    assert nemesis.record(RemoveLogNode(node="a")).success
    assert nemesis.record(RemoveNode(node="a")).success
    assert nemesis.record(AddNode(node="k", join="b")).success
    
    current = ref.deref()
    assert get_node(current, "a").state is NodeState.REMOVING
    assert get_node(current, "k").state is NodeState.ACTIVE
    assert ref.version == 3
    assert nemesis.history == [
        {"type": "info", "f": "remove-log-node", "value": "a"},
        {"type": "info", "f": "remove-node", "value": "a"},
        {"type": "info", "f": "add-node", "value": {"node": "k", "join": "b"}},
    ]


def test_nemesis_record_stale_operation(ref):
    """Test una operación vieja se descarta sin tocar el historial."""
    nemesis = TopologyNemesis(ref, NODES + ["k"])
    
    assert nemesis.record(AddNode(node="k", join="a")).success
    
    result = nemesis.record(AddNode(node="k", join="b"))
    
    assert not result.success
    assert isinstance(result.error, StaleOperationError)
    assert len(nemesis.history) == 1


def test_nemesis_record_rejects_operations_from_same_snapshot(ref):
    """Test dos bajas del log elegidas sobre la misma versión no achican la partición a 1."""
    nemesis = TopologyNemesis(ref, NODES)
    
    # Ambas son legales sobre la topología inicial
    snapshot_ops = nemesis.ref.operations(NODES)
    assert RemoveLogNode(node="a") in snapshot_ops
    assert RemoveLogNode(node="b") in snapshot_ops
    
    assert nemesis.record(RemoveLogNode(node="a")).success
    result = nemesis.record(RemoveLogNode(node="b"))
    
    assert not result.success
    assert result.error.code == "STALE_OPERATION"
    assert log_configuration(ref.deref())[0] == ["b", "c"]
    assert ref.version == 1


def test_nemesis_record_unknown_operation(ref):
    """Test registrar algo que no es una operación falla sin excepción."""
    nemesis = TopologyNemesis(ref, NODES)
    
    result = nemesis.record({"f": "split-replica", "value": "a"})
    
    assert not result.success
    assert isinstance(result.error, StaleOperationError)
    assert nemesis.history == []


def test_transition_metrics(ref):
    """Test métricas de transiciones aplicadas y descartadas."""
    ok_labels = {"kind": "remove-log-node", "outcome": "ok"}
    failed_labels = {"kind": "remove-node", "outcome": "failed"}
    ok_before = sample("distritopo_transitions_total", ok_labels)
    failed_before = sample("distritopo_transitions_total", failed_labels)
    
    nemesis = TopologyNemesis(ref, NODES)
    nemesis.record(RemoveLogNode(node="a"))
    nemesis.record(RemoveNode(node="zz"))
    
    assert sample("distritopo_transitions_total", ok_labels) == ok_before + 1
    assert sample("distritopo_transitions_total", failed_labels) == failed_before + 1


def test_topology_metrics(ref):
    """Test gauges de nodos y particiones del log."""
    nemesis = TopologyNemesis(ref, NODES)
    nemesis.record(RemoveLogNode(node="a"))
    nemesis.record(RemoveNode(node="a"))
    
    assert sample("distritopo_topology_nodes", {"state": "active"}) == 9
    assert sample("distritopo_topology_nodes", {"state": "removing"}) == 1
    assert sample("distritopo_log_partition_size", {"partition": "0"}) == 2
    assert sample("distritopo_log_partition_size", {"partition": "3"}) == 1
    
    # Si la partición 3 se vacía, desaparece
    emptied = apply_op(ref.deref(), RemoveLogNode(node="j")).unwrap()
    observe_topology(emptied)
    assert REGISTRY.get_sample_value(
        "distritopo_log_partition_size", {"partition": "3"}
    ) is None


def test_candidate_operation_metrics(ref):
    """Test gauge de operaciones legales por tipo."""
    nemesis = TopologyNemesis(ref, NODES)
    nemesis.choose()
    
    assert sample("distritopo_candidate_operations", {"kind": "remove-log-node"}) == 9
    assert sample("distritopo_candidate_operations", {"kind": "add-node"}) == 0
    
    assert b"distritopo_transitions_total" in export_metrics()
