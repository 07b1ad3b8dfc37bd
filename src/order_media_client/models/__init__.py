from .order import OrderCreate, OrderInDB, OrderWithFiles, FileInDB
from .seller import AuthUser, AuthSession, SellerInDB
from .upload import UploadItem, SelectionResult, SubmissionResult, DownloadLink, THANK_YOU_ROUTE

__all__ = [
    "OrderCreate", "OrderInDB", "OrderWithFiles", "FileInDB",
    "AuthUser", "AuthSession", "SellerInDB",
    "UploadItem", "SelectionResult", "SubmissionResult", "DownloadLink", "THANK_YOU_ROUTE",
]
