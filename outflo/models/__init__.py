# Models package - database tables
from outflo.models.campaign import Campaign, CampaignStatus
from outflo.models.lead import LeadProfile
