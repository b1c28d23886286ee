"""Pydantic schemas for subscriber and subscribed-channel listings."""
from uuid import UUID

from pydantic import BaseModel

from vidtube.schemas.common import PageMeta
from vidtube.schemas.user import OwnerProfile


class SubscriptionProfile(BaseModel):
    """A listed user, flagged when the requester is subscribed to them."""
    id: UUID
    username: str
    email: str
    full_name: str
    avatar: str | None = None
    is_subscribed: bool = False


class SubscriberPage(PageMeta):
    subscribers: list[SubscriptionProfile]
    total_subscribers: int


class ChannelPage(PageMeta):
    channels: list[SubscriptionProfile]
    total_channels: int


class ChannelSubscribers(BaseModel):
    channel: OwnerProfile
    subscribers: SubscriberPage


class SubscribedChannels(BaseModel):
    subscriber: OwnerProfile
    channels: ChannelPage
