from .company import CompanySettings, CompanyAddress, CompanyContact, CompanyTax, CompanyBranding, InvoiceSettings
from .template import DocumentTemplate, DocumentTemplateCreate, DocumentTemplateUpdate, TemplateDuplicate, ActiveTemplateUpdate, TemplateDesign, DocumentTypeEnum, LayoutEnum, LogoPositionEnum, BorderStyleEnum
from .customer import Customer, Supplier
from .product import Product, ProductCategory, StockMovement, StockMovementTypeEnum
from .invoice import Invoice, Quotation, ProformaInvoice, InvoiceItem, LineItemTax, InvoiceStatusEnum, QuotationStatusEnum, ProformaStatusEnum
from .payment import Payment, PaymentCreate, PaymentMethodEnum
from .dashboard import DashboardMetrics, ActivityLogEntry
from .statement import StatementOfAccount, StatementEntry, StatementFilter, AgingSummary, StatementEntryTypeEnum, StatementEntryStatusEnum, StatementStatusFilterEnum, AgingBucketEnum
