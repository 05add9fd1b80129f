"""Infrastructure ORM Models"""

from .account_model import AccountModel, CreatorProfileModel
from .shoutout_model import ShoutoutTypeModel, CreatorShoutoutModel
from .order_model import OrderModel
from .withdrawal_model import WithdrawalModel
from .activity_log_model import ActivityLogModel, SiteSettingModel

__all__ = [
    'AccountModel',
    'CreatorProfileModel',
    'ShoutoutTypeModel',
    'CreatorShoutoutModel',
    'OrderModel',
    'WithdrawalModel',
    'ActivityLogModel',
    'SiteSettingModel'
]
