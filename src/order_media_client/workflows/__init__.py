from .submission import OrderSubmissionWorkflow, select_images, select_videos
from .management import OrderManagementWorkflow

__all__ = ["OrderSubmissionWorkflow", "OrderManagementWorkflow", "select_images", "select_videos"]
