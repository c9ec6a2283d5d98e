"""
Script para ejecutar los tests por módulo.
"""
import subprocess
import sys


def run_command(cmd, description):
    """Ejecuta un comando y muestra resultado."""
    print(f"\n{'='*70}")
    print(f" {description}")
    print('='*70)
    
    result = subprocess.run(cmd, shell=True)
    return result.returncode == 0


def main():
    """Ejecuta batería de tests."""
    tests = [
        ("pytest tests/test_topology.py -v", "Tests de Topología (construcción y acceso a nodos)"),
        ("pytest tests/test_views.py -v", "Tests de Vistas (réplicas y particiones del log)"),
        ("pytest tests/test_transitions.py -v", "Tests de Transiciones (enumeración y aplicación)"),
        ("pytest tests/test_harness.py -v", "Tests de Harness (referencia, nemesis y métricas)"),
        ("pytest tests/test_simulator.py -v", "Tests de Simulador"),
    ]
    
    results = []
    
    for cmd, desc in tests:
        success = run_command(cmd, desc)
        results.append((desc, success))
    
    # Resumen
    print(f"\n{'='*70}")
    print(" RESUMEN DE TESTS")
    print('='*70)
    
    total = len(results)
    passed = sum(1 for _, success in results if success)
    
    for desc, success in results:
        status = "PASS" if success else "FAIL"
        print(f"  {status} - {desc}")
    
    print(f"\n  Total: {passed}/{total} suites pasaron")
    
    return 0 if passed == total else 1


if __name__ == "__main__":
    sys.exit(main())
