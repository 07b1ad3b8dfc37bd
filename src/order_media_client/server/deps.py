from fastapi import Request

from order_media_client.client import BackendClient
from order_media_client.workflows import OrderManagementWorkflow, OrderSubmissionWorkflow


def get_backend_client(request: Request) -> BackendClient:
    return request.app.state.client


def get_submission_workflow(request: Request) -> OrderSubmissionWorkflow:
    return OrderSubmissionWorkflow(get_backend_client(request))


def get_management_workflow(request: Request) -> OrderManagementWorkflow:
    return OrderManagementWorkflow(get_backend_client(request))
