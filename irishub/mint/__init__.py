"""Mint module: per-block inflation minting, its keeper, genesis and simulation helpers."""