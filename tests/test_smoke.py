# tests/test_smoke.py
"""
Testes de sanidade estrutural (smoke tests) do Hangar Timeline.

Garantem apenas que o pacote é importável e que a API pública está
exposta. Não validam comportamento de domínio.
"""

import hangar_timeline


def test_smoke():
    """O pacote importa e expõe a API pública declarada em `__all__`."""
    for name in hangar_timeline.__all__:
        assert hasattr(hangar_timeline, name)
