# src/imgfx_pipeline/core/__init__.py
"""
Core do ImgFX Pipeline.

Componentes (das folhas para o topo):
    - effects  → Channel Remap, Effect Catalog, Effect Values
    - pipeline → sequência ordenada de efeitos e contexto de run
    - engine   → Executor da cadeia e fronteira com a biblioteca de pixels
    - config   → defaults, loader YAML/JSON, deep-merge e hash

Limites explícitos:
    - Não implementa fórmulas de pixel (biblioteca externa)
    - Não decodifica/codifica arquivos de imagem
    - Não persiste pipelines
"""
