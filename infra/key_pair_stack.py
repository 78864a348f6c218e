"""Define the CDK stack for the CloudFront key pair custom resource.

The stack packages the ``cf_keypair`` Lambda, scopes its Secrets Manager
permissions to the key pair's secret prefix and wires the ``Custom::KeyPair``
resource into a CloudFront public key plus a secret holding its id.
"""

from aws_cdk import CustomResource, Duration, Stack
from aws_cdk import aws_cloudfront as cloudfront
from aws_cdk import aws_iam as iam
from aws_cdk import aws_lambda as lambda_
from aws_cdk import aws_secretsmanager as secretsmanager
from constructs import Construct

from cf_keypair.constants import (
    DEFAULT_KEY_TYPE,
    PRIVATE_SUFFIX,
    PUBLIC_KEY_ID_SUFFIX,
    PUBLIC_SUFFIX,
)
from cf_keypair.events import validate_description, validate_key_pair_name


class CloudFrontKeyPair(Construct):
    """CloudFront public key backed by a generated key pair in Secrets Manager."""

    def __init__(
        self,
        scope: Construct,
        id: str,
        *,
        key_pair_name: str,
        key_pair_description: str,
        key_type: str | None = None,
        secret_regions: list[str] | None = None,
        architecture: lambda_.Architecture | None = None,
        code: lambda_.Code | None = None,
    ) -> None:
        super().__init__(scope, id)
        validate_key_pair_name(key_pair_name)
        validate_description(key_pair_description)
        self.key_pair_name = key_pair_name
        regions = list(secret_regions or [])

        stack = Stack.of(self)
        func = lambda_.Function(
            self,
            "Handler",
            description="CloudFront KeyPair Custom Resource",
            runtime=lambda_.Runtime.PYTHON_3_11,
            architecture=architecture or lambda_.Architecture.ARM_64,
            code=code or lambda_.Code.from_asset("../build/lambda"),
            handler="cf_keypair.lambda_handler",
            timeout=Duration.seconds(10),
        )
        func.add_to_role_policy(
            iam.PolicyStatement(
                actions=[
                    "secretsmanager:CreateSecret",
                    "secretsmanager:DeleteSecret",
                    "secretsmanager:ReplicateSecretToRegions",
                ],
                resources=[
                    f"arn:aws:secretsmanager:{stack.region}:{stack.account}"
                    f":secret:{key_pair_name}/*"
                ],
            )
        )
        func.add_to_role_policy(
            iam.PolicyStatement(actions=["secretsmanager:ListSecrets"], resources=["*"])
        )

        properties = {
            "Name": key_pair_name,
            "Description": key_pair_description,
            "KeyType": key_type or DEFAULT_KEY_TYPE,
        }
        if regions:
            properties["SecretRegions"] = regions
        key_pair = CustomResource(
            self,
            "KeyPair",
            service_token=func.function_arn,
            resource_type="Custom::KeyPair",
            properties=properties,
        )

        self.public_key = cloudfront.PublicKey(
            self,
            "PublicKey",
            public_key_name=key_pair_name,
            comment=key_pair_description,
            encoded_key=key_pair.get_att_string("PublicKey"),
        )
        self.private_key_secret = secretsmanager.Secret.from_secret_name_v2(
            self, "PrivateKeySecret", f"{key_pair_name}/{PRIVATE_SUFFIX}"
        )
        self.public_key_secret = secretsmanager.Secret.from_secret_name_v2(
            self, "PublicKeySecretRef", f"{key_pair_name}/{PUBLIC_SUFFIX}"
        )
        secretsmanager.CfnSecret(
            self,
            "PublicKeyIdSecret",
            name=f"{key_pair_name}/{PUBLIC_KEY_ID_SUFFIX}",
            description=f"{key_pair_description} (Public Key ID)",
            secret_string=self.public_key.public_key_id,
            replica_regions=[
                secretsmanager.CfnSecret.ReplicaRegionProperty(region=region)
                for region in regions
            ]
            or None,
        )

    def grant_read_private_key(self, grantee: iam.IGrantable) -> iam.Grant:
        """Grant read access to the private key secret."""
        return self.private_key_secret.grant_read(grantee)

    def grant_read_public_key(self, grantee: iam.IGrantable) -> iam.Grant:
        """Grant read access to the public key secret."""
        return self.public_key_secret.grant_read(grantee)


class KeyPairStack(Stack):
    """Stack holding a single :class:`CloudFrontKeyPair`."""

    def __init__(
        self,
        scope: Construct,
        id: str,
        *,
        key_pair_name: str,
        key_pair_description: str,
        key_type: str | None = None,
        secret_regions: list[str] | None = None,
        code: lambda_.Code | None = None,
        **kwargs,
    ) -> None:
        super().__init__(scope, id, **kwargs)
        self.key_pair = CloudFrontKeyPair(
            self,
            "KeyPair",
            key_pair_name=key_pair_name,
            key_pair_description=key_pair_description,
            key_type=key_type,
            secret_regions=secret_regions,
            code=code,
        )
