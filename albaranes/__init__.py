"""albaranes: API multi-tenant de clientes, proyectos y albaranes."""

__version__ = "0.1.0"
