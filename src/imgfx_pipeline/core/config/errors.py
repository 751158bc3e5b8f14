# src/imgfx_pipeline/core/config/errors.py
"""
Exceções da camada de configuração do ImgFX Pipeline.

Todas herdam de `ConfigError` e representam violações estruturais do
arquivo de configuração (arquivo ausente, formato desconhecido, raiz que
não é mapa, conflito de tipo no merge). Nenhuma delas é um erro de
construção de efeito ou de execução de passo.
"""


class ConfigError(Exception):
    """Exceção base para erros de configuração."""


class DefaultsNotFoundError(ConfigError):
    """O arquivo de defaults informado não existe."""


class UnsupportedConfigFormatError(ConfigError):
    """
    Extensão de arquivo não suportada.

    Formatos aceitos: `.yaml`, `.yml`, `.json`. O formato nunca é inferido
    pelo conteúdo.
    """


class InvalidConfigRootTypeError(ConfigError):
    """O conteúdo raiz do arquivo não é um dicionário."""


class ConfigTypeConflictError(ConfigError):
    """
    Conflito de tipos entre base e override durante o deep-merge.

    Exemplo:
        - base:     {"executor": {"max_steps": 64}}
        - override: {"executor": "fast"}
    """
