from newsdesk.models.user import User
from newsdesk.models.subscriber import Subscriber, SubscriptionTier
from newsdesk.models.profile import Profile, ProfileRole
from newsdesk.models.newsletter import Newsletter, NewsletterSend
