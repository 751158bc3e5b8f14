# tests/test_smoke.py
"""
Teste de sanidade estrutural do ImgFX Pipeline.

Garante apenas que o pacote é importável e expõe a API pública esperada.
Não valida comportamento de domínio.
"""

import imgfx_pipeline


def test_smoke():
    for name in ("build_effect", "EffectPipeline", "ChainExecutor", "OperationTable"):
        assert hasattr(imgfx_pipeline, name)
