"""GraphQL documents sent to the AppSignal API."""

INCIDENT_FIELDS = """
  id
  number
  count
  lastOccurredAt
  actionNames
  exceptionName
  state
  namespace
  firstBacktraceLine
  errorGroupingStrategy
  severity
"""

INCIDENT_QUERY = """
query IncidentQuery($appId: String!, $incidentNumber: Int!) {
  app(id: $appId) {
    id
    incident(incidentNumber: $incidentNumber) {
      ... on ExceptionIncident {%s}
    }
  }
}
""" % INCIDENT_FIELDS

INCIDENT_SAMPLE_QUERY = """
query IncidentSampleQuery($appId: String!, $incidentNumber: Int!, $sampleId: String) {
  app(id: $appId) {
    id
    incident(incidentNumber: $incidentNumber) {
      ... on ExceptionIncident {
        sample(id: $sampleId) {
          id
          appId
          time
          revision
          action
          namespace
          overview {
            key
            value
          }
          exception {
            name
            message
            backtrace {
              original
              line
              column
              path
              method
              url
              type
              code {
                line
                source
              }
              error {
                class
                message
              }
            }
          }
        }
      }
    }
  }
}
"""

EXCEPTION_INCIDENTS_QUERY = """
query ExceptionIncidentsQuery($appId: String!, $limit: Int, $state: IncidentStateEnum) {
  app(id: $appId) {
    id
    exceptionIncidents(limit: $limit, state: $state) {%s}
  }
}
""" % INCIDENT_FIELDS
