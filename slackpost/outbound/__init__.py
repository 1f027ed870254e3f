from .gateway import SendGateway, OutboundSendRequest, SendResult, SendStatus, UploadTicket
from .dry_run import DryRunSendGateway
from .settings import SlackSettings, load_slack_settings
from .slack import SlackClient
from .factory import OutboundDeliverySettings, build_send_gateway, get_slack_client
