from bottega.client.nats_client import WorkshopBusClient

__all__ = ["WorkshopBusClient"]
