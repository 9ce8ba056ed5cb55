# src/hangar_timeline/core/__init__.py
"""
Core do Hangar Timeline.

O core reúne as regras de cronograma independentes de adapters: tipos de
registro, propagação por dependência, geometria e janela de visualização
da linha do tempo, e o dono do estado publicado.

O core é projetado para ser:
    - determinístico
    - testável de forma isolada
    - livre de dependências de UI, rede ou persistência

Componentes principais:
    - schedule → tipos, índice deduplicado, propagação, gerador de carga
    - timeline → geometria, janela virtualizada, paleta
    - state    → snapshots versionados, coordenador, filtros
    - config   → resolução de configuração (merge, hashing, settings)
    - events / errors / exceptions → registro estruturado e sinais explícitos

Princípios fundamentais:
    - Nenhuma decisão silenciosa: propagação parcial é sempre sinalizada
    - Entradas nunca são mutadas; toda saída é um registro novo
"""
