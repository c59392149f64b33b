"""Export formats: campaign platform rows, CSV text, CRM contacts."""

from leadmerge.export.platforms import (
    format_exports,
    format_for_instantly,
    format_for_smartlead,
    lead_tags,
)
from leadmerge.export.csv_writer import to_csv
from leadmerge.export.crm import map_lead_to_crm_contact, map_leads_to_crm_contacts, parse_location
