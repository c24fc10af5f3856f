import os
import logging
import streamlit as st

# --- OTel & Observability Imports ---
from opentelemetry import trace
from opentelemetry._logs import set_logger_provider
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor
from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import OTLPSpanExporter
from opentelemetry.sdk.resources import Resource

# --- OTel Logging Imports ---
from opentelemetry.sdk._logs import LoggerProvider, LoggingHandler
from opentelemetry.sdk._logs.export import BatchLogRecordProcessor
from opentelemetry.exporter.otlp.proto.grpc._log_exporter import OTLPLogExporter

# --- Prometheus Import ---
from prometheus_client import start_http_server

# --- Application Imports ---
from src.config import AppConfig, Screen
from src.restaurants.adapters.db_manager import DatabaseManager
from src.restaurants.adapters.memory_store import InMemoryRestaurantStore
from src.restaurants.adapters.seeder import DataSeeder
from src.restaurants.adapters.sqlite_preferences import SQLitePreferenceStore
from src.restaurants.application.service import RestaurantService
from src.restaurants.application.synchronizer import RestaurantSynchronizer
from src.restaurants.domain.ports import ILocalStore, IRestaurantStore
from src.restaurants.presentation.navigation import StreamlitNavigator, StreamlitNotifier
from src.restaurants.presentation.state_provider import StreamlitStateProvider
from src.restaurants.presentation.viewmodel import HomeViewModel
from src.restaurants.presentation.views import detail_view, form_view, home_view

VIEWMODEL_KEY = "home_vm"


# --- 1. Configure Observability ---
def configure_observability():
    """
    Configures OpenTelemetry to send Traces and Logs via OTLP.
    Starts a background Prometheus server for Metrics.
    """
    endpoint = os.getenv("OTEL_EXPORTER_OTLP_ENDPOINT")
    headers = os.getenv("OTEL_EXPORTER_OTLP_HEADERS")

    if not endpoint or not headers:
        logging.warning("Observability: OTEL env vars not set. Telemetry stays local.")
        return

    resource = Resource.create({"service.name": "restaurants-home"})

    # --- A. TRACING SETUP ---
    trace_provider = TracerProvider(resource=resource)
    otlp_trace_exporter = OTLPSpanExporter(endpoint=endpoint, headers=headers)
    trace_provider.add_span_processor(BatchSpanProcessor(otlp_trace_exporter))
    trace.set_tracer_provider(trace_provider)

    # --- B. LOGGING SETUP ---
    logger_provider = LoggerProvider(resource=resource)
    otlp_log_exporter = OTLPLogExporter(endpoint=endpoint, headers=headers)
    logger_provider.add_log_record_processor(BatchLogRecordProcessor(otlp_log_exporter))
    set_logger_provider(logger_provider)

    handler = LoggingHandler(level=logging.INFO, logger_provider=logger_provider)
    logging.getLogger().addHandler(handler)

    # --- C. METRICS SETUP (Prometheus) ---
    try:
        start_http_server(8000)
        logging.info("Prometheus metrics server started on port 8000")
    except OSError:
        logging.warning("Prometheus port 8000 already in use (likely Streamlit reload). Skipping.")


# --- 2. Bootstrap Application ---
if "observability_configured" not in st.session_state:
    logging.basicConfig(level=logging.INFO, format='%(asctime)s [%(levelname)s] %(message)s')

    configure_observability()
    st.session_state.observability_configured = True


# --- 3. Dependency Injection (Composition Root) ---
@st.cache_resource
def get_remote_store() -> IRestaurantStore:
    if AppConfig.use_firestore():
        # Imported lazily so the memory backend runs without GCP credentials
        from src.restaurants.adapters.firestore_store import FirestoreRestaurantStore

        return FirestoreRestaurantStore(project=AppConfig.GOOGLE_CLOUD_PROJECT)

    store = InMemoryRestaurantStore()
    DataSeeder(store).seed_if_empty(AppConfig.SEED_FILE)
    return store


@st.cache_resource
def get_local_store() -> ILocalStore:
    return SQLitePreferenceStore(DatabaseManager(AppConfig.LOCAL_DB_PATH))


def get_viewmodel(
    state_provider: StreamlitStateProvider,
    navigator: StreamlitNavigator,
    notifier: StreamlitNotifier,
) -> HomeViewModel:
    vm = state_provider.get(VIEWMODEL_KEY)
    if vm is None:
        remote, local = get_remote_store(), get_local_store()
        vm = HomeViewModel(
            synchronizer=RestaurantSynchronizer(remote, local),
            service=RestaurantService(remote, local, notifier),
            navigator=navigator,
        )
        vm.open()
        state_provider.set(VIEWMODEL_KEY, vm)
    return vm


def main():
    st.set_page_config(page_title=AppConfig.APP_TITLE, layout="centered")

    state_provider = StreamlitStateProvider()
    navigator = StreamlitNavigator(state_provider)
    notifier = StreamlitNotifier(state_provider)
    vm = get_viewmodel(state_provider, navigator, notifier)

    # --- 4. Sidebar ---
    if st.sidebar.button("Reconnect"):
        vm.close()
        state_provider.pop(VIEWMODEL_KEY)
        st.rerun()
    with st.sidebar.expander("🕵️‍♂️ Telemetry"):
        st.caption(f"Backend: {AppConfig.BACKEND}")
        st.caption(f"Snapshots applied: {vm.version}")

    notifier.flush()

    # --- 5. Main Router ---
    screen, params = navigator.current()
    restaurant = params.get("restaurant")

    if screen == Screen.RESTAURANT_LIST:
        detail_view.render(vm, restaurant)
    elif screen == Screen.ADD_RESTAURANT:
        form_view.render(vm)
    elif screen == Screen.EDIT_RESTAURANT:
        form_view.render(vm, restaurant)
    else:
        home_view.render(vm)


if __name__ == "__main__":
    main()
