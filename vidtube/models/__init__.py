from vidtube.models.user import User
from vidtube.models.video import Video
from vidtube.models.comment import Comment
from vidtube.models.tweet import Tweet
from vidtube.models.playlist import Playlist, PlaylistVideo
from vidtube.models.engagement import Like, Subscription

__all__ = ["User", "Video", "Comment", "Tweet", "Playlist", "PlaylistVideo", "Like", "Subscription"]
