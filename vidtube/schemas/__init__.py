from vidtube.schemas.common import ApiResponse, ErrorResponse, PageMeta
from vidtube.schemas.user import (
    UserCreate,
    UserUpdate,
    UserResponse,
    OwnerProfile,
    ChannelProfile,
    Token,
    LoginRequest,
)
from vidtube.schemas.video import VideoResponse, VideoPage
from vidtube.schemas.comment import CommentCreate, CommentUpdate, CommentResponse, CommentPage
from vidtube.schemas.tweet import TweetCreate, TweetUpdate, TweetResponse, TweetPage
