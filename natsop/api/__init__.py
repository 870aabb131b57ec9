"""The NATS custom resource: types, conditions and status."""