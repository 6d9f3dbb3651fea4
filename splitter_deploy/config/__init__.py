"""
Configuration package for the Splitter deployment tooling.
"""

from splitter_deploy.config.network import (
    CHAINS,
    RECEIPT_TIMEOUT,
    RPC_TIMEOUT,
    NetworkProfile,
    get_chain_config,
    get_chain_id,
    get_rpc_url,
    get_explorer_url,
    get_explorer_api_url,
    is_verifiable,
)

from splitter_deploy.config.env import (
    DEFAULT_ENV_FILE,
    EnvConfig,
    load_env_config,
)

from splitter_deploy.config.payees import (
    LOCAL_PAYEES,
    resolve_parameters,
)

__all__ = [
    # Network
    'CHAINS',
    'RECEIPT_TIMEOUT',
    'RPC_TIMEOUT',
    'NetworkProfile',
    'get_chain_config',
    'get_chain_id',
    'get_rpc_url',
    'get_explorer_url',
    'get_explorer_api_url',
    'is_verifiable',

    # Environment
    'DEFAULT_ENV_FILE',
    'EnvConfig',
    'load_env_config',

    # Payees
    'LOCAL_PAYEES',
    'resolve_parameters',
]
