from typing import Dict, Any, Optional, TypeVar, Callable
from config.app_config import AppConfig
from core.api_client import ApiClient, RestApi
from core.session import AuthSession, JsonFileStore, KeyValueStore
from service.query_cache import QueryCache
from service.auth_service import AuthService
from service.user_service import UserService
from service.catalog_service import ToolService, VpsService, ProxyService
from service.order_service import OrderService, TransactionService
from service.dashboard_service import DashboardService
from service.file_service import FileService
T = TypeVar('T')

class DependencyContainer:
    def __init__(self):
        self._instances: Dict[str, Any] = {}
        self._factories: Dict[str, Callable[[], Any]] = {}
        self._config: Optional[AppConfig] = None

    def register_config(self, config: AppConfig) -> None:
        self._config = config
        self._instances['config'] = config
    def register_singleton(self, name: str, factory: Callable[[], T]) -> None:
        self._factories[name] = factory
    def register_instance(self, name: str, instance: Any) -> None:
        self._instances[name] = instance

    def get(self, name: str) -> T:
        if name in self._instances:
            return self._instances[name]
        if name in self._factories:
            instance = self._factories[name]()
            self._instances[name] = instance
            return instance
        raise KeyError(f"Dependency '{name}' not registered")
    def register_core_dependencies(self) -> None:
        self.register_singleton('session_store', self._create_session_store)
        self.register_singleton('auth_session', self._create_auth_session)
        self.register_singleton('api_client', self._create_api_client)
        self.register_singleton('rest_api', self._create_rest_api)
        self.register_singleton('query_cache', QueryCache)
    def register_service_dependencies(self) -> None:
        self.register_singleton('auth_service', self._create_auth_service)
        self.register_singleton('user_service', self._resource_factory(UserService, 'users'))
        self.register_singleton('tool_service', self._resource_factory(ToolService, 'tools'))
        self.register_singleton('vps_service', self._resource_factory(VpsService, 'vps'))
        self.register_singleton('proxy_service', self._resource_factory(ProxyService, 'proxies'))
        self.register_singleton('order_service', self._resource_factory(OrderService, 'orders'))
        self.register_singleton('transaction_service',
                                self._resource_factory(TransactionService, 'transactions'))
        self.register_singleton('dashboard_service',
                                self._resource_factory(DashboardService, 'dashboard'))
        self.register_singleton('file_service', self._create_file_service)
    def _create_session_store(self) -> KeyValueStore:
        return JsonFileStore(self._config.session.path)
    def _create_auth_session(self) -> AuthSession:
        return AuthSession(self.get('session_store')).init()
    def _create_api_client(self) -> ApiClient:
        session = self.get('auth_session')
        return ApiClient(
            self._config.api.base_url,
            token_provider=lambda: session.auth_token,
            timeout=self._config.api.timeout
        )
    def _create_rest_api(self) -> RestApi:
        return RestApi(self.get('api_client'))
    def _resource_factory(self, service_cls: Callable[..., T], group: str) -> Callable[[], T]:
        def factory() -> T:
            return service_cls(getattr(self.get('rest_api'), group), self.get('query_cache'))
        return factory
    def _create_auth_service(self) -> AuthService:
        return AuthService(
            self.get('rest_api').auth,
            self.get('auth_session'),
            self.get('query_cache')
        )
    def _create_file_service(self) -> FileService:
        return FileService(self.get('rest_api').files)
    def cleanup(self) -> None:
        client = self._instances.get('api_client')
        if client:
            client.session.close()
        self._instances.clear()
        self._factories.clear()
_container = DependencyContainer()
def get_container() -> DependencyContainer:
    return _container
def initialize_container(config: AppConfig) -> None:
    container = get_container()
    container.register_config(config)
    container.register_core_dependencies()
    container.register_service_dependencies()
def get_service(service_name: str) -> Any:
    return get_container().get(service_name)
def cleanup_container() -> None:
    get_container().cleanup()
