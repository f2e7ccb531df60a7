STATE_KEY = 'papi_state_id'

STAGE_INIT = 'satosa_papi_backend.PapiAuthSource.state'
STAGE_LOGOUT = 'satosa_papi_backend.PapiAuthSource.logout'
AUTHID = 'satosa_papi_backend.PapiAuthSource.AuthId'

SP_METADATA = 'SPMetadata'
RELAY_STATE = 'saml:RelayState'
ATTRIBUTES = 'Attributes'

# inbound request parameters
PROVIDER_ID_PARAM = 'providerId'
STATE_ID_PARAM = 'SSPStateID'

# outbound PAPI redirect parameters
HLI_PARAM = 'PAPIHLI'
OPOA_PARAM = 'PAPIOPOA'
URL_PARAM = 'URL'

PAPI_REDIRECT_URL_FINISH = 'PAPI_REDIRECT_URL_FINISH'
PAPI_SLO_REDIRECT_URL_FINISH = 'PAPI_SLO_REDIRECT_URL_FINISH'
