from .access import AccessService, CatalogServices
from .authorization import AuthorizationOracle, StaticAuthorizationOracle, TokenAuthorizationOracle
from .config import CatalogConfig, LogLevel, load_config_from_env
from .context import CatalogScope, RequestContext
from .exceptions import (
    CatalogError,
    ConfigurationError,
    EntityNotFound,
    GatewayError,
    RecordNotFound,
    Unauthorized,
)
from .gateway import EntityFilter, EntityGateway, MemoryGateway, MemoryRecord, Pagination
from .logging import (
    CatalogFormatter,
    RequestLoggerAdapter,
    get_request_logger,
    redact_secrets,
    safe_log_value,
    safe_preview,
    setup_logging,
)
from .permissions import GROUP_PROFILES, Capabilities, UserGroup, expand_capabilities
from .relations import RELATION_NAMES, ProductRelations
from .tokens import CallerToken, TokenBuilder
from .visibility import VIEW_INACTIVE_CAPABILITIES, EntityKind, Visibility, decide, view_inactive_capability

__all__ = [
    'AccessService',
    'CatalogServices',
    'AuthorizationOracle',
    'StaticAuthorizationOracle',
    'TokenAuthorizationOracle',
    'CatalogConfig',
    'LogLevel',
    'load_config_from_env',
    'CatalogScope',
    'RequestContext',
    'CatalogError',
    'ConfigurationError',
    'EntityNotFound',
    'GatewayError',
    'RecordNotFound',
    'Unauthorized',
    'EntityFilter',
    'EntityGateway',
    'MemoryGateway',
    'MemoryRecord',
    'Pagination',
    'CatalogFormatter',
    'RequestLoggerAdapter',
    'get_request_logger',
    'redact_secrets',
    'safe_log_value',
    'safe_preview',
    'setup_logging',
    'GROUP_PROFILES',
    'Capabilities',
    'UserGroup',
    'expand_capabilities',
    'RELATION_NAMES',
    'ProductRelations',
    'CallerToken',
    'TokenBuilder',
    'VIEW_INACTIVE_CAPABILITIES',
    'EntityKind',
    'Visibility',
    'decide',
    'view_inactive_capability',
]
